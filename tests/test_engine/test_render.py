"""Tests for applying operations to a grid."""

from __future__ import annotations

import numpy as np

from oledsketch.engine.render import apply_operation, render
from oledsketch.models.operations import (
    CircleOp,
    FillAllOp,
    FilledRectangleOp,
    FilledRoundedRectangleOp,
    FloodFillOp,
    FreehandCompleteOp,
    ImportImageOp,
    PixelOp,
    RectangleOp,
    TriangleOp,
)
from oledsketch.utils import rasterizer as rz
from oledsketch.utils.grid import count_on, full_grid, new_grid
from tests.conftest import grid_with


def test_empty_log_is_blank():
    assert count_on(render([])) == 0


def test_pixel_and_erase():
    grid = render([PixelOp(x=3, y=4), PixelOp(x=5, y=5), PixelOp(x=3, y=4, value=False)])
    assert not grid[4, 3]
    assert grid[5, 5]


def test_rectangle_uses_inclusive_size():
    grid = render([RectangleOp(x=2, y=3, width=4, height=3)])
    assert np.array_equal(grid, grid_with(rz.rectangle_outline(2, 3, 5, 5)))


def test_filled_rectangle_erase():
    grid = render([FillAllOp(), FilledRectangleOp(x=0, y=0, width=10, height=10, value=False)])
    assert count_on(grid) == 128 * 64 - 100


def test_filled_rounded_rectangle_clears_lit_corners():
    grid = render(
        [
            FilledRectangleOp(x=0, y=0, width=20, height=20),
            FilledRoundedRectangleOp(x=0, y=0, width=20, height=20),
        ]
    )
    assert not grid[0, 0]
    assert not grid[19, 19]
    assert grid[10, 10]
    assert np.array_equal(grid, grid_with(rz.rounded_rectangle_filled(0, 0, 20, 20)))


def test_erasing_rounded_rectangle_clears_whole_box():
    grid = render([FillAllOp(), FilledRoundedRectangleOp(x=10, y=10, width=20, height=20, value=False)])
    assert count_on(grid) == 128 * 64 - 400
    assert grid[9, 9]


def test_circle():
    grid = render([CircleOp(x=64, y=32, radius=10)])
    assert np.array_equal(grid, grid_with(rz.circle_outline(64, 32, 10)))


def test_triangle_with_non_positive_height_draws_nothing():
    assert count_on(render([TriangleOp(top_x=20, top_y=20, width=10, height=0)])) == 0
    assert count_on(render([TriangleOp(top_x=20, top_y=20, width=10, height=-5)])) == 0


def test_freehand_complete_draws_nothing():
    assert count_on(render([FreehandCompleteOp(start_x=0, start_y=0, end_x=5, end_y=5)])) == 0


def test_flood_fill_needs_matching_seed():
    wall = [RectangleOp(x=0, y=0, width=10, height=10)]
    inside = render(wall + [FloodFillOp(x=5, y=5, target_value=False, replacement_value=True)])
    assert count_on(inside) == 100
    mismatch = render(wall + [FloodFillOp(x=0, y=0, target_value=False, replacement_value=True)])
    assert count_on(mismatch) == 36


def test_import_image_replaces_grid():
    image = full_grid()
    image[0, 0] = False
    rows = tuple(tuple(row) for row in image.tolist())
    grid = render([PixelOp(x=0, y=0), ImportImageOp(pixels=rows)])
    assert np.array_equal(grid, image)


def test_render_does_not_touch_start_grid():
    start = new_grid()
    out = render([PixelOp(x=1, y=1)], start)
    assert out[1, 1]
    assert not start[1, 1]


def test_apply_operation_in_place():
    grid = new_grid()
    assert apply_operation(grid, FillAllOp()) is grid
    assert count_on(grid) == 128 * 64
