"""Pixel grid helpers — construction, copying, text dumps.

The display is a fixed 128×64 monochrome panel. Grids are numpy ``bool_``
arrays indexed ``grid[y, x]`` with (0, 0) at the top-left.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from oledsketch.errors import GridShapeError

WIDTH = 128
HEIGHT = 64

PixelGrid = NDArray[np.bool_]


def new_grid(width: int = WIDTH, height: int = HEIGHT) -> PixelGrid:
    """All-off grid."""
    return np.zeros((height, width), dtype=np.bool_)


def full_grid(width: int = WIDTH, height: int = HEIGHT) -> PixelGrid:
    """All-on grid."""
    return np.ones((height, width), dtype=np.bool_)


def as_grid(
    pixels: PixelGrid | Sequence[Sequence[bool]],
    strict: bool = False,
) -> PixelGrid:
    """Return an owned ``bool_`` copy of ``pixels``.

    Args:
        pixels: Nested row lists or an array, row-major.
        strict: Reject anything that is not exactly HEIGHT×WIDTH.

    Raises:
        GridShapeError: ``strict`` is set and the dimensions are wrong.
    """
    grid = np.array(pixels, dtype=np.bool_, copy=True)
    if strict and grid.shape != (HEIGHT, WIDTH):
        raise GridShapeError(tuple(grid.shape), (HEIGHT, WIDTH))
    return grid


def in_bounds(grid: PixelGrid, x: int, y: int) -> bool:
    h, w = grid.shape
    return 0 <= x < w and 0 <= y < h


def is_on(grid: PixelGrid, x: int, y: int) -> bool:
    """Pixel value, with off-grid positions reading as off."""
    h, w = grid.shape
    return 0 <= x < w and 0 <= y < h and bool(grid[y, x])


def count_on(grid: PixelGrid) -> int:
    return int(np.count_nonzero(grid))


def grid_to_text(grid: PixelGrid, on: str = "#", off: str = ".") -> str:
    """Dump a grid as text, one line per row. Handy in test failure output."""
    return "\n".join("".join(on if cell else off for cell in row) for row in grid)


def grid_from_text(text: str, on: str = "#") -> PixelGrid:
    """Inverse of :func:`grid_to_text` for small hand-written fixtures."""
    rows = [line for line in text.strip("\n").splitlines()]
    width = max((len(r) for r in rows), default=0)
    grid = np.zeros((len(rows), width), dtype=np.bool_)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            grid[y, x] = ch == on
    return grid
