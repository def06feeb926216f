"""Tests for the host-facing view."""

from PIL import Image

from cannibalmap.output.style import BG
from cannibalmap.view import ConflictMapView


class TestConflictMapView:
    def test_click_drives_active_conflict(self, dataset, config):
        view = ConflictMapView(config)
        view.load(dataset)
        node = view.layout().nodes_for(2)[0]

        assert view.on_pointer_down(node.x, node.y) == 2
        assert view.active_conflict_id == 2
        assert view.active_conflict.query == "bathroom renovation"

        view.on_pointer_down(node.x, node.y)
        assert view.active_conflict is None

    def test_reload_resets_selection(self, dataset, config):
        view = ConflictMapView(config)
        view.load(dataset)
        node = view.layout().nodes[0]
        view.on_pointer_down(node.x, node.y)
        assert view.active_conflict_id == 1

        view.load(dataset[1:])
        assert view.active_conflict_id is None
        assert len(view.conflicts) == 2

    def test_resize_recomputes_geometry(self, dataset, config):
        view = ConflictMapView(config)
        view.load(dataset)
        before = [(n.x, n.y) for n in view.layout().nodes]
        view.resize(1200, 600)
        after = view.layout()
        assert (after.width, after.height) == (1200, 600)
        assert [(n.x, n.y) for n in after.nodes] != before
        for n in after.nodes:
            assert 0 <= n.x <= 1200 and 0 <= n.y <= 600

    def test_render_and_trends(self, dataset, config):
        view = ConflictMapView(config)
        view.load(dataset)
        img = Image.new("RGB", (view.width, view.height), BG)
        layout = view.render(img)
        assert len(layout.nodes) == 6

        trend_img = Image.new("RGB", (300, 120), BG)
        assert view.render_trends(trend_img) is None

        node = layout.nodes[0]
        view.on_pointer_down(node.x, node.y)
        plot = view.render_trends(trend_img)
        # fixture pages carry no trend history
        assert plot is not None and plot.has_data is False

    def test_empty_snapshot(self, config):
        view = ConflictMapView(config)
        view.load([])
        img = Image.new("RGB", (view.width, view.height), BG)
        assert view.render(img).nodes == []
        assert view.on_pointer_down(10, 10) is None
