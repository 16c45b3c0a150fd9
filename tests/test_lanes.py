from __future__ import annotations

import pytest

from spacerace.engine.lanes import LaneGeometry


def test_lane_width_splits_track_between_paddings() -> None:
    geometry = LaneGeometry(width=480, lanes=8, padding=44)
    assert geometry.lane_width == pytest.approx(49.0)


def test_lane_center_formula() -> None:
    geometry = LaneGeometry(width=480, lanes=8, padding=44)
    assert geometry.lane_center(0) == pytest.approx(68.5)
    assert geometry.lane_center(7) == pytest.approx(411.5)


def test_lane_centers_are_evenly_spaced_and_inside_track() -> None:
    geometry = LaneGeometry(width=600, lanes=5, padding=30)
    centers = [geometry.lane_center(i) for i in range(5)]
    gaps = {round(b - a, 6) for a, b in zip(centers, centers[1:])}
    assert gaps == {round(geometry.lane_width, 6)}
    assert centers[0] > 30
    assert centers[-1] < 600 - 30


def test_lane_left_is_center_minus_half_lane() -> None:
    geometry = LaneGeometry(width=480, lanes=8, padding=44)
    for i in range(8):
        assert geometry.lane_left(i) == pytest.approx(geometry.lane_center(i) - geometry.lane_width / 2)
