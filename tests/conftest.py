"""Shared test fixtures and grid builders."""

from __future__ import annotations

import numpy as np
import pytest

from oledsketch.engine.calls import CallStyle, execute_calls
from oledsketch.utils import rasterizer as rz
from oledsketch.utils.geometry import Point
from oledsketch.utils.grid import PixelGrid, new_grid

STYLE = CallStyle()
ON = STYLE.on_color
OFF = STYLE.off_color

CLEAR_LINE = "display.clearDisplay();"
FLUSH_LINE = "display.display();"


def grid_with(*point_lists: list[Point]) -> PixelGrid:
    """All-off display grid with the given point lists turned on."""
    grid = new_grid()
    for points in point_lists:
        rz.plot(grid, points)
    return grid


def pixel_grid(x: int, y: int) -> PixelGrid:
    return grid_with([(x, y)])


def block_grid(left: int, top: int, w: int, h: int) -> PixelGrid:
    return grid_with(rz.rectangle_filled(left, top, w, h))


def circle_grid(cx: int, cy: int, r: int) -> PixelGrid:
    return grid_with(rz.circle_outline(cx, cy, r))


def disc_grid(cx: int, cy: int, r: int) -> PixelGrid:
    return grid_with(rz.circle_filled(cx, cy, r))


def random_grid(seed: int, density: float) -> PixelGrid:
    rng = np.random.default_rng(seed)
    return rng.random((64, 128)) < density


def run_listing(code: str) -> PixelGrid:
    """Execute a generated listing on a fresh grid."""
    return execute_calls(code, STYLE)


def smiley_grid() -> PixelGrid:
    """Face outline, two filled eyes, a straight mouth."""
    return grid_with(
        rz.circle_outline(64, 32, 24),
        rz.circle_filled(55, 25, 3),
        rz.circle_filled(73, 25, 3),
        rz.line(54, 42, 74, 42),
    )


@pytest.fixture
def blank() -> PixelGrid:
    return new_grid()


@pytest.fixture
def smiley() -> PixelGrid:
    return smiley_grid()
