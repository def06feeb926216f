"""Tests for linear scale construction."""

import math

import pytest

from cannibalmap.scale import build_scale


class TestBuildScale:
    def test_maps_domain_ends_to_inset_range(self):
        scale = build_scale([10, 20, 30], (0, 100), padding=10)
        assert scale.to_pixel(10) == pytest.approx(10)
        assert scale.to_pixel(30) == pytest.approx(90)
        assert scale.to_pixel(20) == pytest.approx(50)

    def test_inverse_round_trips(self):
        scale = build_scale([3.2, 7.8, 12.0], (300, 0), padding=20, invert=True)
        for v in (3.2, 5.0, 12.0):
            assert scale.to_value(scale.to_pixel(v)) == pytest.approx(v)

    def test_invert_swaps_ends(self):
        scale = build_scale([0, 10], (0, 100), invert=True)
        assert scale.to_pixel(10) == pytest.approx(0)
        assert scale.to_pixel(0) == pytest.approx(100)

    def test_descending_range_inset_moves_inward(self):
        scale = build_scale([0, 10], (300, 0), padding=20)
        assert scale.to_pixel(0) == pytest.approx(280)
        assert scale.to_pixel(10) == pytest.approx(20)

    def test_degenerate_domain_centers_point(self):
        scale = build_scale([5, 5, 5], (0, 200), padding=20)
        px = scale.to_pixel(5)
        assert math.isfinite(px)
        assert px == pytest.approx(100)
        for v in (-1e6, 0, 5, 1e6):
            assert math.isfinite(scale.to_pixel(v))

    def test_empty_samples_is_identity_without_data(self):
        scale = build_scale([], (0, 100), padding=10)
        assert scale.has_data is False
        assert scale.to_pixel(42) == 42
        assert scale.to_value(42) == 42
        assert scale.ticks([0, 0.5, 1]) == []

    def test_padding_wider_than_range_collapses(self):
        scale = build_scale([0, 10], (0, 30), padding=20)
        assert scale.to_pixel(0) == pytest.approx(15)
        assert scale.to_pixel(10) == pytest.approx(15)
        assert math.isfinite(scale.to_value(15))

    def test_ticks_follow_domain(self):
        scale = build_scale([0, 100], (0, 200))
        ticks = scale.ticks([0, 0.5, 1])
        assert [v for v, _ in ticks] == [0, 50, 100]
        assert [p for _, p in ticks] == pytest.approx([0, 100, 200])
