"""Tests for grid helpers."""

from __future__ import annotations

import numpy as np
import pytest

from oledsketch.errors import GridShapeError
from oledsketch.utils.grid import (
    HEIGHT,
    WIDTH,
    as_grid,
    count_on,
    full_grid,
    grid_from_text,
    grid_to_text,
    is_on,
    new_grid,
)


def test_new_and_full_grid():
    assert new_grid().shape == (HEIGHT, WIDTH)
    assert count_on(new_grid()) == 0
    assert count_on(full_grid()) == WIDTH * HEIGHT


def test_as_grid_copies():
    source = new_grid()
    grid = as_grid(source)
    grid[0, 0] = True
    assert not source[0, 0]


def test_as_grid_from_lists():
    grid = as_grid([[0, 1], [1, 0]])
    assert grid.dtype == np.bool_
    assert grid[0, 1] and grid[1, 0]


def test_as_grid_strict_rejects_wrong_shape():
    with pytest.raises(GridShapeError, match="64x128"):
        as_grid([[True] * 10] * 10, strict=True)


def test_grid_shape_error_is_value_error():
    assert issubclass(GridShapeError, ValueError)


def test_is_on_off_grid():
    grid = full_grid()
    assert is_on(grid, 0, 0)
    assert not is_on(grid, -1, 0)
    assert not is_on(grid, WIDTH, 0)


def test_text_round_trip():
    text = "#..\n.#.\n..#"
    grid = grid_from_text(text)
    assert grid.shape == (3, 3)
    assert grid_to_text(grid) == text
