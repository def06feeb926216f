"""Click-share bar: one horizontal stacked bar per conflict."""

import logging
from collections.abc import Sequence
from pathlib import Path

from PIL import Image, ImageDraw

from cannibalmap.config import Config
from cannibalmap.metrics import BarSegment, click_share_segments, format_split_clicks
from cannibalmap.models import Conflict
from cannibalmap.output.style import BG, CARD_BG, TEXT, TEXT_DIM, font, palette_color

logger = logging.getLogger(__name__)


def segment_spans(
    segments: Sequence[BarSegment], x0: float, x1: float,
) -> list[tuple[float, float, int]]:
    """Pixel spans (start, end, color_index) for segments laid left to right.

    Negative widths count as zero and anything past the bar end is cut
    off, so shares summing to 103 fill the bar and 97 leaves a gap.
    """
    spans = []
    cursor = x0
    scale = (x1 - x0) / 100
    for seg in segments:
        if cursor >= x1:
            break
        width = max(seg.width_percent, 0.0) * scale
        end = min(cursor + width, x1)
        if end > cursor:
            spans.append((cursor, end, seg.color_index))
        cursor = end
    return spans


def render_share_bar(
    img: Image.Image,
    box: tuple[int, int, int, int],
    segments: Sequence[BarSegment],
) -> None:
    """Draw the stacked bar inside box = (x0, y0, x1, y1)."""
    x0, y0, x1, y1 = box
    draw = ImageDraw.Draw(img)
    draw.rectangle(box, fill=CARD_BG)
    for start, end, color_index in segment_spans(segments, x0, x1):
        draw.rectangle((start, y0, end, y1), fill=palette_color(color_index))


def share_bar_caption(conflict: Conflict) -> str:
    """Status plus the recommended action, shown under the bar."""
    caption = conflict.status.value.upper()
    if conflict.recommendation:
        caption += f": {conflict.recommendation}"
    return caption


def generate_share_bar(
    conflict: Conflict,
    config: Config,
    output_path: Path | None = None,
) -> Path:
    """Render a labelled click-share bar for one conflict and save it."""
    W, H, PAD = config.plot.width, 84, 12
    img = Image.new("RGB", (W, H), BG)
    draw = ImageDraw.Draw(img)

    draw.text((PAD, 6), conflict.query, font=font(12, bold=True), fill=TEXT)
    draw.text((PAD, 22), format_split_clicks(conflict), font=font(10, mono=True), fill=TEXT_DIM)
    render_share_bar(img, (PAD, 40, W - PAD, 52), click_share_segments(conflict))
    draw.text((PAD, 60), share_bar_caption(conflict), font=font(10), fill=TEXT_DIM)

    if output_path is None:
        output_dir = config.resolved_output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / "share_bar.png"

    img.save(str(output_path))
    logger.info("Share bar for %r: %s", conflict.query, output_path)
    return output_path
