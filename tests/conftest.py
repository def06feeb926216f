"""Shared test fixtures for cannibalmap tests."""

import pytest

from cannibalmap.config import ClusterPlotConfig, Config, PulseConfig, SelectionConfig, TrendPlotConfig
from cannibalmap.models import Conflict, Page, Severity


def make_page(url: str, position: float, impressions: int = 1000, clicks: int = 100,
              click_share: float = 50.0, trend: list[float] | None = None) -> Page:
    return Page(
        url=url, title=url.strip("/"), position=position,
        impressions=impressions, clicks=clicks, ctr=clicks / impressions * 100 if impressions else 0.0,
        click_share=click_share, trend=trend or [],
    )


@pytest.fixture()
def config(tmp_path):
    return Config(
        output_dir=str(tmp_path / "out"),
        plot=ClusterPlotConfig(),
        trend=TrendPlotConfig(),
        selection=SelectionConfig(),
        pulse=PulseConfig(),
    )


@pytest.fixture()
def two_page_conflict():
    """600x300 scenario conflict: a strong primary and a weaker secondary."""
    return Conflict(
        id=1, query="kitchen remodeling", severity=Severity.HIGH, volatility=0.6,
        pages=[
            make_page("/kitchen-remodel-guide", 3.2, impressions=4000, clicks=200, click_share=60),
            make_page("/kitchen-ideas", 7.8, impressions=1200, clicks=80, click_share=40),
        ],
    )


@pytest.fixture()
def dataset(two_page_conflict):
    """Three conflicts spread over the plot, including a single-page one."""
    return [
        two_page_conflict,
        Conflict(
            id=2, query="bathroom renovation", severity=Severity.MEDIUM, volatility=0.3,
            pages=[
                make_page("/bathroom-renovation", 5.0, impressions=2500, clicks=150, click_share=55),
                make_page("/small-bathroom", 6.0, impressions=2600, clicks=120, click_share=30),
                make_page("/bathroom-tiles", 12.0, impressions=300, clicks=10, click_share=15),
            ],
        ),
        Conflict(
            id="solo", query="deck staining", severity=Severity.LOW, volatility=0.05,
            pages=[make_page("/deck-staining", 9.0, impressions=800, clicks=5, click_share=100)],
        ),
    ]
