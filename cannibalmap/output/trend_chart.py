"""Position trend chart for the pages of one conflict.

All series share one vertical domain, padded by domain_pad on both ends,
so relative movement between competing pages is comparable. Series may
have different lengths; each is spread across the full width by index.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, ImageDraw, ImageFilter

from cannibalmap.config import Config, TrendPlotConfig
from cannibalmap.models import Conflict, Page
from cannibalmap.output.style import BG, DIVIDER, TEXT_DIM, circle, font, palette_color
from cannibalmap.scale import LinearScale, build_scale, identity_scale

logger = logging.getLogger(__name__)


@dataclass
class TrendSeries:
    page: Page
    color_index: int
    points: list[tuple[float, float]]


@dataclass
class TrendPlot:
    width: int
    height: int
    y_scale: LinearScale
    series: list[TrendSeries] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return bool(self.series)


def shared_domain(pages: Sequence[Page], pad: float = 1.0) -> tuple[float, float] | None:
    """[min - pad, max + pad] over every non-empty trend; None if all are empty."""
    values = [v for p in pages if p.trend for v in p.trend]
    if not values:
        return None
    return min(values) - pad, max(values) + pad


def normalize_trends(
    pages: Sequence[Page],
    width: int,
    height: int,
    config: TrendPlotConfig | None = None,
) -> TrendPlot:
    """Map every page's trend into pixel space on a shared vertical scale.

    color_index is the page's index in the conflict, so colors match the
    cluster map. Empty series are skipped entirely.
    """
    config = config or TrendPlotConfig()
    domain = shared_domain(pages, config.domain_pad)
    if domain is None:
        return TrendPlot(width, height, identity_scale())

    # Same orientation as the cluster map: position 1 at the top
    y_scale = build_scale(domain, (height, 0), padding=config.padding, invert=True)
    left = config.padding
    right = max(width - config.padding, left)

    plot = TrendPlot(width, height, y_scale)
    for i, page in enumerate(pages):
        n = len(page.trend)
        if n == 0:
            continue
        points = []
        for j, value in enumerate(page.trend):
            x = left if n == 1 else left + j / (n - 1) * (right - left)
            points.append((x, y_scale.to_pixel(value)))
        plot.series.append(TrendSeries(page=page, color_index=i, points=points))

    logger.debug(
        "Normalized %d/%d trend series, domain %.1f..%.1f",
        len(plot.series), len(pages), domain[0], domain[1],
    )
    return plot


def _draw_glow(img: Image.Image, plot: TrendPlot, config: TrendPlotConfig) -> None:
    """Soft wide strokes under every line.

    Each stroke is blurred as a coverage mask and filled with its solid series
    color, so the fade only ever blends toward the line color.
    """
    base = img if img.mode == "RGBA" else img.convert("RGBA")
    for series in plot.series:
        if len(series.points) < 2:
            continue
        mask = Image.new("L", img.size, 0)
        ImageDraw.Draw(mask).line(series.points, fill=90, width=config.glow_width, joint="curve")
        if config.glow_blur > 0:
            mask = mask.filter(ImageFilter.GaussianBlur(radius=config.glow_blur))
        glow = Image.new("RGBA", img.size, palette_color(series.color_index) + (255,))
        glow.putalpha(mask)
        base.alpha_composite(glow)
    if base is not img:
        img.paste(base.convert(img.mode))


def render_trend_chart(img: Image.Image, plot: TrendPlot, config: TrendPlotConfig | None = None) -> None:
    """Paint the trend lines onto img; an empty plot gets only the frame."""
    config = config or TrendPlotConfig()
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, plot.width - 1, plot.height - 1), outline=DIVIDER, width=1)

    if not plot.has_data:
        draw.text((8, 8), "No trend data", font=font(11), fill=TEXT_DIM)
        return

    _draw_glow(img, plot, config)

    draw = ImageDraw.Draw(img)
    for series in plot.series:
        color = palette_color(series.color_index)
        if len(series.points) > 1:
            draw.line(series.points, fill=color, width=config.line_width, joint="curve")
        circle(draw, series.points[-1], config.marker_radius, fill=color, outline=BG, width=1)


def generate_trend_chart(
    conflict: Conflict,
    config: Config,
    output_path: Path | None = None,
) -> Path:
    """Normalize, render and save the trend chart of one conflict."""
    tc = config.trend
    plot = normalize_trends(conflict.pages, tc.width, tc.height, tc)
    img = Image.new("RGB", (tc.width, tc.height), BG)
    render_trend_chart(img, plot, tc)

    if output_path is None:
        output_dir = config.resolved_output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / "trends.png"

    img.save(str(output_path))
    logger.info("Trend chart for %r: %s (%d series)", conflict.query, output_path, len(plot.series))
    return output_path
