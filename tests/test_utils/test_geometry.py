"""Tests for geometry helpers."""

from __future__ import annotations

import numpy as np
import pytest

from oledsketch.utils.geometry import (
    circle_samples,
    distance,
    in_bounds_count,
    neighbour_count,
    point_in_triangle,
    round_half_up,
    shift_sum,
    triangle_area,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.49, 1), (2.5, 3), (-0.5, 0), (-1.5, -1), (-1.51, -2)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_distance():
    assert distance((0, 0), (3, 4)) == 5.0


def test_triangle_area_unsigned():
    assert triangle_area((0, 0), (4, 0), (0, 3)) == 6.0
    assert triangle_area((0, 0), (0, 3), (4, 0)) == 6.0


def test_point_in_triangle():
    tri = ((0, 0), (4, 0), (0, 4))
    assert point_in_triangle((1, 1), *tri)
    assert point_in_triangle((0, 0), *tri)
    assert not point_in_triangle((5, 5), *tri)


def test_circle_samples_quarter_turns():
    assert circle_samples(3, 4) == [(3, 0), (0, 3), (-3, 0), (0, -3)]


def test_circle_samples_keep_duplicates():
    samples = circle_samples(1, 16)
    assert len(samples) == 16
    assert len(set(samples)) < 16


def test_inward_samples_stay_inside_radius():
    for r in (3, 7, 12):
        for dx, dy in circle_samples(r, 6 * r, inward=True):
            assert dx * dx + dy * dy <= r * r


def test_shift_sum_single_offset():
    grid = np.zeros((5, 5), dtype=np.bool_)
    grid[2, 2] = True
    acc = shift_sum(grid, [(1, 0)])
    assert acc[2, 1] == 1
    assert acc.sum() == 1


def test_shift_sum_off_grid_reads_off():
    grid = np.ones((3, 3), dtype=np.bool_)
    acc = shift_sum(grid, [(1, 0)])
    assert acc[:, 2].tolist() == [0, 0, 0]
    assert acc[:, :2].sum() == 6


def test_in_bounds_count():
    counts = in_bounds_count((3, 3), [(0, 1), (0, -1)])
    assert counts[1, 1] == 2
    assert counts[0, 1] == 1
    assert counts[2, 1] == 1


def test_neighbour_count():
    grid = np.ones((3, 3), dtype=np.bool_)
    counts = neighbour_count(grid)
    assert counts[1, 1] == 8
    assert counts[0, 0] == 3
    assert counts[0, 1] == 5
