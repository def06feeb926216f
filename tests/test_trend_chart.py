"""Tests for trend normalization and rendering."""

import math

import pytest
from PIL import Image

from cannibalmap.config import TrendPlotConfig
from cannibalmap.models import Conflict
from cannibalmap.output.style import BG
from cannibalmap.output.trend_chart import (
    generate_trend_chart,
    normalize_trends,
    render_trend_chart,
    shared_domain,
)
from conftest import make_page


@pytest.fixture()
def uneven_pages():
    return [
        make_page("/empty", 3.0, trend=[]),
        make_page("/single", 5.0, trend=[5.0]),
        make_page("/full", 4.0, trend=[4.0 + (i % 5) * 0.5 for i in range(28)]),
    ]


class TestSharedDomain:
    def test_pads_pooled_values(self, uneven_pages):
        assert shared_domain(uneven_pages) == (3.0, 7.0)

    def test_empty_series_ignored(self):
        pages = [make_page("/a", 1.0, trend=[]), make_page("/b", 1.0, trend=[10.0, 12.0])]
        assert shared_domain(pages) == (9.0, 13.0)

    def test_all_empty(self):
        assert shared_domain([make_page("/a", 1.0, trend=[])]) is None


class TestNormalizeTrends:
    def test_uneven_lengths(self, uneven_pages):
        config = TrendPlotConfig(padding=20)
        plot = normalize_trends(uneven_pages, 600, 200, config)
        assert [s.page.url for s in plot.series] == ["/single", "/full"]
        assert [s.color_index for s in plot.series] == [1, 2]

        single, full = plot.series
        assert single.points[0][0] == pytest.approx(20)
        assert len(full.points) == 28
        assert full.points[0][0] == pytest.approx(20)
        assert full.points[-1][0] == pytest.approx(580)
        for x, y in single.points + full.points:
            assert math.isfinite(x) and math.isfinite(y)
            assert 20 <= y <= 180

    def test_lower_position_higher_on_screen(self):
        pages = [make_page("/a", 1.0, trend=[2.0, 8.0])]
        plot = normalize_trends(pages, 400, 200)
        (series,) = plot.series
        assert series.points[0][1] < series.points[1][1]

    def test_no_data(self):
        plot = normalize_trends([make_page("/a", 1.0)], 400, 200)
        assert plot.has_data is False
        assert plot.y_scale.has_data is False


class TestRenderTrendChart:
    def test_renders_uneven_series(self, uneven_pages):
        img = Image.new("RGB", (600, 200))
        plot = normalize_trends(uneven_pages, 600, 200)
        render_trend_chart(img, plot)
        x, y = plot.series[1].points[-1]
        assert img.getpixel((int(x), int(y))) != (0, 0, 0)

    def test_glow_never_darkens_background(self):
        plot = normalize_trends([make_page("/a", 5.0, trend=[5.0, 5.0, 5.0])], 600, 200)
        (series,) = plot.series
        line_y = round(series.points[0][1])
        img = Image.new("RGB", (600, 200), BG)
        render_trend_chart(img, plot)

        column = [img.getpixel((300, y)) for y in range(line_y - 10, line_y + 11)]
        for px in column:
            assert all(c >= b for c, b in zip(px, BG))
        # glow reaches past the 2px stroke
        assert img.getpixel((300, line_y - 5)) != BG

    def test_glow_on_rgba_canvas(self):
        plot = normalize_trends([make_page("/a", 5.0, trend=[4.0, 6.0])], 300, 100)
        img = Image.new("RGBA", (300, 100), BG + (255,))
        render_trend_chart(img, plot)
        assert img.mode == "RGBA"
        assert img.getpixel((150, 50))[3] == 255

    def test_empty_plot_does_not_raise(self):
        img = Image.new("RGB", (300, 100))
        render_trend_chart(img, normalize_trends([], 300, 100))

    def test_generate_writes_png(self, config, uneven_pages):
        conflict = Conflict(id=1, query="q", pages=uneven_pages)
        path = generate_trend_chart(conflict, config)
        assert path.exists()
        assert Image.open(path).size == (config.trend.width, config.trend.height)
