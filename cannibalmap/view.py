"""Host-facing conflict map view.

Holds the current snapshot, the plot size and the selection controller.
Geometry is recomputed on every call; nothing is cached across a resize
or a reload.
"""

import logging
from collections.abc import Iterable

from PIL import Image

from cannibalmap.config import Config
from cannibalmap.layout import ClusterLayout, layout_clusters
from cannibalmap.models import Conflict
from cannibalmap.output.cluster_map import render_cluster_map
from cannibalmap.output.trend_chart import TrendPlot, normalize_trends, render_trend_chart
from cannibalmap.selection import ConflictId, SelectionController

logger = logging.getLogger(__name__)


class ConflictMapView:
    def __init__(self, config: Config | None = None, width: int | None = None, height: int | None = None) -> None:
        self.config = config or Config()
        self.width = width if width is not None else self.config.plot.width
        self.height = height if height is not None else self.config.plot.height
        self.conflicts: tuple[Conflict, ...] = ()
        self.selection = SelectionController(self.config.selection)

    def load(self, conflicts: Iterable[Conflict]) -> None:
        """Replace the whole snapshot and clear the selection."""
        self.conflicts = tuple(conflicts)
        self.selection.reset()
        logger.debug("Loaded snapshot with %d conflicts", len(self.conflicts))

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = width, height

    def layout(self) -> ClusterLayout:
        return layout_clusters(self.conflicts, self.width, self.height, self.config.plot)

    @property
    def active_conflict_id(self) -> ConflictId | None:
        return self.selection.active_conflict_id

    @property
    def active_conflict(self) -> Conflict | None:
        active = self.selection.active_conflict_id
        if active is None:
            return None
        return next((c for c in self.conflicts if c.id == active), None)

    def on_pointer_down(self, x: float, y: float) -> ConflictId | None:
        return self.selection.on_pointer_down(self.layout(), x, y)

    def render(self, img: Image.Image) -> ClusterLayout:
        """Draw the cluster map; returns the layout used for this frame."""
        layout = self.layout()
        render_cluster_map(img, layout, self.active_conflict_id, self.config.plot)
        return layout

    def trend_plot(self, width: int | None = None, height: int | None = None) -> TrendPlot | None:
        conflict = self.active_conflict
        if conflict is None:
            return None
        tc = self.config.trend
        return normalize_trends(
            conflict.pages,
            width if width is not None else tc.width,
            height if height is not None else tc.height,
            tc,
        )

    def render_trends(self, img: Image.Image) -> TrendPlot | None:
        """Draw the active conflict's trends sized to img; no-op without a selection."""
        plot = self.trend_plot(*img.size)
        if plot is None:
            return None
        render_trend_chart(img, plot, self.config.trend)
        return plot
