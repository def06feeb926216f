"""Cluster layout: places every page of every conflict on the impressions × position plot."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from cannibalmap.config import ClusterPlotConfig
from cannibalmap.models import Conflict, Page
from cannibalmap.scale import LinearScale, build_scale, identity_scale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedNode:
    """A page positioned in screen space."""

    x: float
    y: float
    radius: float
    color_index: int
    page: Page
    conflict: Conflict
    page_index: int


@dataclass
class ClusterLayout:
    """Screen-space nodes for one frame, plus the scales that produced them."""

    width: int
    height: int
    x_scale: LinearScale
    y_scale: LinearScale
    nodes: list[PlacedNode] = field(default_factory=list)
    spans: list[tuple[int, int]] = field(default_factory=list)  # [start, end) of each conflict in nodes

    @property
    def has_data(self) -> bool:
        return bool(self.nodes)

    def nodes_for(self, conflict_id: int | str | None) -> list[PlacedNode]:
        return [n for n in self.nodes if n.conflict.id == conflict_id]

    def clusters(self) -> list[tuple[Conflict, list[PlacedNode]]]:
        """Nodes grouped by conflict, in dataset order."""
        return [(self.nodes[start].conflict, self.nodes[start:end]) for start, end in self.spans]


def node_radius(clicks: int, config: ClusterPlotConfig) -> float:
    """Radius from click volume, clamped to [min_radius, max_radius]."""
    raw = clicks / config.radius_divisor if config.radius_divisor > 0 else config.max_radius
    return max(config.min_radius, min(raw, config.max_radius))


def layout_clusters(
    conflicts: Sequence[Conflict],
    width: int,
    height: int,
    config: ClusterPlotConfig | None = None,
) -> ClusterLayout:
    """Lay out all conflicts for a width × height plot.

    Pure: the same conflicts and dimensions always give the same nodes,
    in dataset order (conflict, then page).
    """
    config = config or ClusterPlotConfig()
    pages = [p for c in conflicts for p in c.pages]
    if not pages:
        return ClusterLayout(width, height, identity_scale(), identity_scale())

    x_scale = build_scale(
        (p.impressions for p in pages), (0, width), padding=config.padding,
    )
    # Vertical range runs bottom-up; inverted so a better (lower) position sits higher.
    y_scale = build_scale(
        (p.position for p in pages), (height, 0), padding=config.padding, invert=True,
    )

    nodes: list[PlacedNode] = []
    spans: list[tuple[int, int]] = []
    for conflict in conflicts:
        start = len(nodes)
        for i, page in enumerate(conflict.pages):
            nodes.append(PlacedNode(
                x=x_scale.to_pixel(page.impressions),
                y=y_scale.to_pixel(page.position),
                radius=node_radius(page.clicks, config),
                color_index=i,
                page=page,
                conflict=conflict,
                page_index=i,
            ))
        spans.append((start, len(nodes)))

    logger.debug(
        "Laid out %d nodes for %d conflicts in %dx%d", len(nodes), len(conflicts), width, height,
    )
    return ClusterLayout(width, height, x_scale, y_scale, nodes, spans)
