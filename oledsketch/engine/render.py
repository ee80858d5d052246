"""Apply drawing operations to a grid — the ground-truth semantics of the log."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import numpy as np

from oledsketch.models.operations import (
    OPERATION_KINDS,
    CircleOp,
    DrawingOperation,
    FillAllOp,
    FilledCircleOp,
    FilledRectangleOp,
    FilledRoundedRectangleOp,
    FilledTriangleOp,
    FloodFillOp,
    FreehandCompleteOp,
    FreehandSegmentOp,
    ImportImageOp,
    LineOp,
    PixelOp,
    RectangleOp,
    RoundedRectangleOp,
    TriangleOp,
)
from oledsketch.utils import rasterizer as rz
from oledsketch.utils.geometry import Point
from oledsketch.utils.grid import PixelGrid, new_grid


def _pixel(grid: PixelGrid, op: PixelOp) -> None:
    rz.plot(grid, [(op.x, op.y)], op.value)


def _line(grid: PixelGrid, op: LineOp | FreehandSegmentOp) -> None:
    h, w = grid.shape
    rz.plot(grid, rz.line(op.x1, op.y1, op.x2, op.y2, w, h), op.value)


def _nothing(grid: PixelGrid, op: FreehandCompleteOp) -> None:
    pass


def _rectangle(grid: PixelGrid, op: RectangleOp) -> None:
    h, w = grid.shape
    rz.plot(grid, rz.rectangle_box(op.x, op.y, op.width, op.height, w, h), op.value)


def _filled_rectangle(grid: PixelGrid, op: FilledRectangleOp) -> None:
    h, w = grid.shape
    rz.plot(grid, rz.rectangle_filled(op.x, op.y, op.width, op.height, w, h), op.value)


def _rounded_rectangle(grid: PixelGrid, op: RoundedRectangleOp) -> None:
    h, w = grid.shape
    points = rz.rounded_rectangle_outline(op.x, op.y, op.width, op.height, width=w, height=h)
    rz.plot(grid, points, op.value)


def _filled_rounded_rectangle(grid: PixelGrid, op: FilledRoundedRectangleOp) -> None:
    h, w = grid.shape
    points = rz.rounded_rectangle_filled(op.x, op.y, op.width, op.height, width=w, height=h)
    rz.plot(grid, points, op.value)
    # corners are cleared whatever the fill value
    corners = rz.rounded_rectangle_corners(op.x, op.y, op.width, op.height, width=w, height=h)
    rz.plot(grid, corners, False)


def _circle(grid: PixelGrid, op: CircleOp) -> None:
    h, w = grid.shape
    rz.plot(grid, rz.circle_outline(op.x, op.y, op.radius, w, h), op.value)


def _filled_circle(grid: PixelGrid, op: FilledCircleOp) -> None:
    h, w = grid.shape
    rz.plot(grid, rz.circle_filled(op.x, op.y, op.radius, w, h), op.value)


def _triangle_points(grid: PixelGrid, op: TriangleOp | FilledTriangleOp, filled: bool) -> list[Point]:
    if op.height <= 0:
        return []
    h, w = grid.shape
    p1, p2, p3 = rz.triangle_vertices(op.top_x, op.top_y, op.width, op.height, w, h)
    if filled:
        return rz.triangle_filled(p1, p2, p3, w, h)
    return rz.triangle_outline(p1, p2, p3, w, h)


def _triangle(grid: PixelGrid, op: TriangleOp) -> None:
    rz.plot(grid, _triangle_points(grid, op, filled=False), op.value)


def _filled_triangle(grid: PixelGrid, op: FilledTriangleOp) -> None:
    rz.plot(grid, _triangle_points(grid, op, filled=True), op.value)


def _fill_all(grid: PixelGrid, op: FillAllOp) -> None:
    grid[:, :] = True


def _flood_fill(grid: PixelGrid, op: FloodFillOp) -> None:
    if op.target_value == op.replacement_value:
        return
    h, w = grid.shape
    if not (0 <= op.x < w and 0 <= op.y < h) or bool(grid[op.y, op.x]) != op.target_value:
        return
    rz.plot(grid, rz.flood_fill(grid, op.x, op.y, op.replacement_value), op.replacement_value)


def _import_image(grid: PixelGrid, op: ImportImageOp) -> None:
    if op.pixels is None:
        return
    image = np.array(op.pixels, dtype=np.bool_)
    if image.shape == grid.shape:
        grid[:, :] = image


_APPLIERS: dict[str, Callable[[PixelGrid, DrawingOperation], None]] = {
    "PIXEL": _pixel,
    "LINE": _line,
    "FREEHAND_SEGMENT": _line,
    "FREEHAND_COMPLETE": _nothing,
    "RECTANGLE": _rectangle,
    "FILLED_RECTANGLE": _filled_rectangle,
    "ROUNDED_RECTANGLE": _rounded_rectangle,
    "FILLED_ROUNDED_RECTANGLE": _filled_rounded_rectangle,
    "CIRCLE": _circle,
    "FILLED_CIRCLE": _filled_circle,
    "TRIANGLE": _triangle,
    "FILLED_TRIANGLE": _filled_triangle,
    "FILL_ALL": _fill_all,
    "FLOOD_FILL": _flood_fill,
    "IMPORT_IMAGE": _import_image,
}

if set(_APPLIERS) != OPERATION_KINDS:
    raise RuntimeError(f"Unhandled operation kinds: {OPERATION_KINDS ^ set(_APPLIERS)}")


def apply_operation(grid: PixelGrid, op: DrawingOperation) -> PixelGrid:
    """Apply one operation in place and return the grid."""
    _APPLIERS[op.kind](grid, op)
    return grid


def render(
    log: Iterable[DrawingOperation],
    grid: PixelGrid | None = None,
) -> PixelGrid:
    """Apply every operation, in order, to a copy of ``grid`` (default all-off)."""
    out = new_grid() if grid is None else grid.copy()
    for op in log:
        apply_operation(out, op)
    return out
