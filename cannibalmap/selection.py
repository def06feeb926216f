"""Hit-testing and the active-conflict selection."""

import logging
import math

from cannibalmap.config import SelectionConfig
from cannibalmap.layout import ClusterLayout, PlacedNode

logger = logging.getLogger(__name__)

ConflictId = int | str


def nearest_node(
    layout: ClusterLayout, x: float, y: float, threshold: float,
) -> PlacedNode | None:
    """Closest node center within threshold pixels, or None.

    Ties go to the node met first in dataset order.
    """
    best: PlacedNode | None = None
    best_dist = math.inf
    for node in layout.nodes:
        dist = math.hypot(node.x - x, node.y - y)
        if dist < best_dist:
            best, best_dist = node, dist
    if best is None or best_dist > threshold:
        return None
    return best


def select_nearest(
    layout: ClusterLayout,
    x: float,
    y: float,
    current: ConflictId | None,
    threshold: float,
) -> ConflictId | None:
    """Resolve a click to the new selection.

    A miss (or an empty plot) resolves to None. Clicking the already
    selected conflict toggles it off.
    """
    node = nearest_node(layout, x, y, threshold)
    if node is None:
        return None
    if node.conflict.id == current:
        return None
    return node.conflict.id


class SelectionController:
    """Owns active_conflict_id; the only writer of selection state."""

    def __init__(self, config: SelectionConfig | None = None) -> None:
        self.config = config or SelectionConfig()
        self.active_conflict_id: ConflictId | None = None

    def on_pointer_down(self, layout: ClusterLayout, x: float, y: float) -> ConflictId | None:
        """Apply a click. Returns the resolved conflict id, None on a miss.

        A miss leaves the current selection as it was.
        """
        node = nearest_node(layout, x, y, self.config.hit_threshold)
        if node is None:
            logger.debug("Click at (%.1f, %.1f) hit nothing", x, y)
            return None

        self.active_conflict_id = select_nearest(
            layout, x, y, self.active_conflict_id, self.config.hit_threshold,
        )
        logger.debug(
            "Click at (%.1f, %.1f) hit conflict %s, active=%s",
            x, y, node.conflict.id, self.active_conflict_id,
        )
        return node.conflict.id

    def reset(self) -> None:
        self.active_conflict_id = None
