"""Linear scales: map a data domain onto a pixel range and back.

Vertical axes are expressed with a descending pixel range (bottom pixel
first), so the same builder serves both axes.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinearScale:
    """Affine map between a data domain and an (inset) pixel range."""

    domain_min: float
    domain_max: float
    start: float  # pixel that domain_min maps to (before inversion)
    end: float  # pixel that domain_max maps to (before inversion)
    invert: bool = False
    has_data: bool = True

    def to_pixel(self, value: float) -> float:
        if not self.has_data:
            return value
        t = (value - self.domain_min) / (self.domain_max - self.domain_min)
        if self.invert:
            t = 1.0 - t
        return self.start + t * (self.end - self.start)

    def to_value(self, pixel: float) -> float:
        if not self.has_data:
            return pixel
        span = self.end - self.start
        t = (pixel - self.start) / span if span else 0.5
        if self.invert:
            t = 1.0 - t
        return self.domain_min + t * (self.domain_max - self.domain_min)

    def ticks(self, fractions: Iterable[float]) -> list[tuple[float, float]]:
        """(value, pixel) pairs at fixed fractions of the domain."""
        if not self.has_data:
            return []
        out = []
        for f in fractions:
            value = self.domain_min + f * (self.domain_max - self.domain_min)
            out.append((value, self.to_pixel(value)))
        return out


def identity_scale() -> LinearScale:
    """No-op scale returned when there is nothing to map."""
    return LinearScale(0.0, 1.0, 0.0, 1.0, has_data=False)


def build_scale(
    samples: Iterable[float],
    pixel_range: tuple[float, float],
    padding: float = 0.0,
    invert: bool = False,
    epsilon: float = 1.0,
) -> LinearScale:
    """Build a scale from the min/max of samples.

    A zero-width domain is widened by epsilon on each side so the value
    lands in the middle of the range. Padding is a pixel inset applied to
    both ends of pixel_range.
    """
    values = list(samples)
    if not values:
        return identity_scale()

    lo, hi = min(values), max(values)
    if hi == lo:
        lo, hi = lo - epsilon, hi + epsilon

    p0, p1 = pixel_range
    direction = 1.0 if p1 >= p0 else -1.0
    start = p0 + padding * direction
    end = p1 - padding * direction
    if (end - start) * direction < 0:
        # inset wider than the range
        start = end = (p0 + p1) / 2

    return LinearScale(lo, hi, start, end, invert=invert)
