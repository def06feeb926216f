"""Cluster map: conflicts plotted as linked bubbles on impressions × position.

Each page is a circle sized by clicks; pages of the same conflict are joined
by dashed edges (every pair, so a crowded cluster looks crowded). The
active conflict is drawn in the same pass with a highlight style, which
keeps paint order equal to dataset order.
"""

import itertools
import logging
from collections.abc import Sequence
from pathlib import Path

from PIL import Image, ImageDraw

from cannibalmap.config import ClusterPlotConfig, Config
from cannibalmap.layout import ClusterLayout, PlacedNode, layout_clusters
from cannibalmap.models import Conflict
from cannibalmap.output.style import (
    BG,
    DIVIDER,
    EDGE,
    GRID,
    TEXT,
    TEXT_DIM,
    brightened,
    circle,
    dashed_line,
    dimmed,
    font,
    format_number,
    mix,
    palette_color,
)

logger = logging.getLogger(__name__)

HALO_EXTRA = 6  # px beyond the node radius


def _draw_grid(draw: ImageDraw.ImageDraw, layout: ClusterLayout, config: ClusterPlotConfig) -> None:
    """Reference lines at fixed fractions of each axis, labelled with data values."""
    w, h = layout.width, layout.height
    label_font = font(9)

    for value, px in layout.x_scale.ticks(config.grid_fractions):
        draw.line([(px, 0), (px, h)], fill=GRID, width=1)
        draw.text((px + 2, h - 12), format_number(value), font=label_font, fill=TEXT_DIM)

    for value, py in layout.y_scale.ticks(config.grid_fractions):
        draw.line([(0, py), (w, py)], fill=GRID, width=1)
        draw.text((2, py + 1), f"#{format_number(value)}", font=label_font, fill=TEXT_DIM)


def _draw_edges(
    draw: ImageDraw.ImageDraw, nodes: list[PlacedNode], active: bool, config: ClusterPlotConfig,
) -> None:
    if len(nodes) < 2:
        return
    color = TEXT_DIM if active else EDGE
    for a, b in itertools.combinations(nodes, 2):
        dashed_line(
            draw, (a.x, a.y), (b.x, b.y),
            fill=color, width=2 if active else 1,
            dash=config.edge_dash, gap=config.edge_gap,
        )


def _draw_node(
    draw: ImageDraw.ImageDraw, node: PlacedNode, active: bool, config: ClusterPlotConfig,
) -> None:
    color = palette_color(node.color_index)
    center = (node.x, node.y)

    if active:
        # Faint halo, pre-blended with the background
        circle(draw, center, node.radius + HALO_EXTRA, fill=mix(color, BG, 0.8))
        circle(draw, center, node.radius, fill=brightened(color), outline=TEXT, width=3)
    else:
        circle(draw, center, node.radius, fill=dimmed(color), outline=color, width=1)

    circle(draw, center, config.core_radius, fill=TEXT if active else color)


def render_cluster_map(
    img: Image.Image,
    layout: ClusterLayout,
    active_conflict_id: int | str | None = None,
    config: ClusterPlotConfig | None = None,
) -> None:
    """Paint the layout onto img. Empty layouts get only the frame."""
    config = config or ClusterPlotConfig()
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, layout.width - 1, layout.height - 1), outline=DIVIDER, width=1)

    if not layout.has_data:
        draw.text((8, 8), "No conflicts", font=font(11), fill=TEXT_DIM)
        return

    _draw_grid(draw, layout, config)

    for conflict, nodes in layout.clusters():
        active = active_conflict_id is not None and conflict.id == active_conflict_id
        _draw_edges(draw, nodes, active, config)
        for node in nodes:
            _draw_node(draw, node, active, config)


def generate_cluster_map(
    conflicts: Sequence[Conflict],
    config: Config,
    output_path: Path | None = None,
    active_conflict_id: int | str | None = None,
) -> Path:
    """Lay out, render and save the cluster map as a PNG."""
    plot = config.plot
    layout = layout_clusters(conflicts, plot.width, plot.height, plot)
    img = Image.new("RGB", (plot.width, plot.height), BG)
    render_cluster_map(img, layout, active_conflict_id, plot)

    if output_path is None:
        output_dir = config.resolved_output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / "cluster_map.png"

    img.save(str(output_path))
    logger.info("Cluster map: %s (%d nodes)", output_path, len(layout.nodes))
    return output_path
