"""Derived visual metrics: severity tiers, click-share segments, volatility pulse.

All calculators are total: unknown or out-of-range input degrades to the
lowest tier or the clamped bound instead of raising.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from cannibalmap.config import PulseConfig
from cannibalmap.models import Conflict, Page, Severity


@dataclass(frozen=True)
class SeverityTier:
    name: str
    rank: int  # higher = worse
    weight: float  # display weight (stroke / badge emphasis)
    color: tuple[int, int, int]


TIERS: dict[Severity, SeverityTier] = {
    Severity.CRITICAL: SeverityTier("critical", 3, 1.0, (248, 81, 73)),
    Severity.HIGH: SeverityTier("high", 2, 0.75, (255, 123, 114)),
    Severity.MEDIUM: SeverityTier("medium", 1, 0.5, (210, 153, 34)),
    Severity.LOW: SeverityTier("low", 0, 0.25, (88, 166, 255)),
}

LOWEST_TIER = TIERS[Severity.LOW]

# Minimum volatility for each tier, checked worst first
VOLATILITY_THRESHOLDS: list[tuple[float, Severity]] = [
    (0.75, Severity.CRITICAL),
    (0.5, Severity.HIGH),
    (0.25, Severity.MEDIUM),
]


@dataclass(frozen=True)
class BarSegment:
    width_percent: float
    color_index: int


def _tier_for_score(score: float) -> SeverityTier:
    if math.isnan(score):
        return LOWEST_TIER
    for threshold, severity in VOLATILITY_THRESHOLDS:
        if score >= threshold:
            return TIERS[severity]
    return LOWEST_TIER


def severity_tier(value: Severity | str | float | int | None) -> SeverityTier:
    """Map a severity label or a numeric volatility score to its tier."""
    if isinstance(value, Severity):
        return TIERS[value]
    if isinstance(value, bool) or value is None:
        return LOWEST_TIER
    if isinstance(value, (int, float)):
        return _tier_for_score(float(value))
    try:
        return TIERS[Severity(str(value).strip().lower())]
    except ValueError:
        return LOWEST_TIER


def click_share_segments(conflict: Conflict) -> list[BarSegment]:
    """One bar segment per page, taken from click_share as-is.

    Totals of 97 or 103 pass through untouched; the bar renderer clips.
    """
    return [
        BarSegment(width_percent=page.click_share, color_index=i)
        for i, page in enumerate(conflict.pages)
    ]


def derive_click_shares(pages: Sequence[Page]) -> list[float]:
    """Each page's percentage of the group's clicks (zeros when there are none)."""
    total = sum(p.clicks for p in pages)
    if total <= 0:
        return [0.0 for _ in pages]
    return [p.clicks / total * 100 for p in pages]


def format_split_clicks(conflict: Conflict) -> str:
    """Rounded click split, e.g. "71% / 29%"; "N/A" when nothing was clicked."""
    if conflict.total_clicks <= 0:
        return "N/A"
    return " / ".join(f"{round(s)}%" for s in derive_click_shares(conflict.pages))


def pulse_size(volatility: float, config: PulseConfig | None = None) -> float:
    """Clamped linear map of volatility to a pulse radius."""
    config = config or PulseConfig()
    if math.isnan(volatility) or config.volatility_cap <= 0:
        t = 0.0
    else:
        t = max(0.0, min(volatility / config.volatility_cap, 1.0))
    return config.min_radius + t * (config.max_radius - config.min_radius)


def pulse_color(volatility: float) -> tuple[int, int, int]:
    """Pulse color, using the same thresholds as severity_tier."""
    return _tier_for_score(volatility).color
