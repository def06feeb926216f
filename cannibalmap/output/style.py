"""Shared drawing style: fonts, colors, palette and a dashed-line helper."""

import math

from PIL import ImageDraw, ImageFont

# --- Fonts ---

_FONT_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"
_FONT_REGULAR = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
_FONT_MONO = "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"


def font(size: int, bold: bool = False, mono: bool = False) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    if mono:
        path = _FONT_MONO
    else:
        path = _FONT_BOLD if bold else _FONT_REGULAR
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        # DejaVu not installed (minimal containers); Pillow's bundled font
        return ImageFont.load_default()


# --- Colors ---

RGB = tuple[int, int, int]

BG = (13, 17, 23)
CARD_BG = (22, 27, 34)
TEXT = (230, 237, 243)
TEXT_DIM = (110, 118, 129)
DIVIDER = (48, 54, 61)
GRID = (33, 38, 45)
EDGE = (72, 79, 88)

# Ordinal page roles: index 0 (primary candidate) is always blue, and so on
PALETTE: list[RGB] = [
    (88, 166, 255),    # blue
    (255, 123, 114),   # coral
    (63, 185, 80),     # green
    (210, 153, 34),    # gold
    (174, 124, 255),   # purple
    (201, 97, 152),    # pink
    (121, 192, 255),   # light blue
    (255, 166, 87),    # orange
]


def palette_color(index: int) -> RGB:
    return PALETTE[index % len(PALETTE)]


def mix(color: RGB, other: RGB, amount: float) -> RGB:
    """Blend color toward other by amount (0 = color, 1 = other)."""
    return tuple(int(round(a + (b - a) * amount)) for a, b in zip(color, other))  # type: ignore[return-value]


def dimmed(color: RGB) -> RGB:
    return mix(color, BG, 0.35)


def brightened(color: RGB) -> RGB:
    return mix(color, (255, 255, 255), 0.3)


# --- Primitives ---


def dashed_line(
    draw: ImageDraw.ImageDraw,
    start: tuple[float, float],
    end: tuple[float, float],
    fill: RGB,
    width: int = 1,
    dash: int = 6,
    gap: int = 4,
) -> None:
    """Draw a dashed segment; PIL has no native dash pattern."""
    x0, y0 = start
    x1, y1 = end
    length = math.hypot(x1 - x0, y1 - y0)
    if length == 0:
        return
    dx, dy = (x1 - x0) / length, (y1 - y0) / length
    step = max(dash + gap, 1)
    pos = 0.0
    while pos < length:
        seg_end = min(pos + dash, length)
        draw.line(
            [(x0 + dx * pos, y0 + dy * pos), (x0 + dx * seg_end, y0 + dy * seg_end)],
            fill=fill, width=width,
        )
        pos += step


def circle(
    draw: ImageDraw.ImageDraw,
    center: tuple[float, float],
    radius: float,
    fill: RGB | None = None,
    outline: RGB | None = None,
    width: int = 1,
) -> None:
    cx, cy = center
    draw.ellipse(
        (cx - radius, cy - radius, cx + radius, cy + radius),
        fill=fill, outline=outline, width=width,
    )


def format_number(value: float) -> str:
    """Compact axis label: 1234 -> 1.2k, 3.25 -> 3.2."""
    if abs(value) >= 1000:
        return f"{value / 1000:.1f}k"
    if abs(value) >= 100 or float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.1f}"
