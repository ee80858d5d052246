"""Operation replay — translate a recorded log into primitive calls, in order.

Each operation kind maps to exactly one call or to nothing. The mapping table
is checked against the full set of kinds at import time, so adding a kind
without deciding how it replays fails loudly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from oledsketch.engine import calls as c
from oledsketch.engine.calls import DrawCall
from oledsketch.engine.render import apply_operation
from oledsketch.models.operations import (
    OPERATION_KINDS,
    CircleOp,
    DrawingOperation,
    FilledCircleOp,
    FilledRectangleOp,
    FilledRoundedRectangleOp,
    FilledTriangleOp,
    FreehandSegmentOp,
    LineOp,
    PixelOp,
    RectangleOp,
    RoundedRectangleOp,
    TriangleOp,
    is_replayable,
)
from oledsketch.utils.grid import HEIGHT, WIDTH, new_grid
from oledsketch.utils.rasterizer import corner_radius, rounded_rectangle_corners, triangle_vertices

logger = logging.getLogger(__name__)


def _pixel(op: PixelOp) -> DrawCall:
    return DrawCall(c.DRAW_PIXEL, (op.x, op.y), op.value)


def _line(op: LineOp | FreehandSegmentOp) -> DrawCall:
    return DrawCall(c.DRAW_LINE, (op.x1, op.y1, op.x2, op.y2), op.value)


def _rect(op: RectangleOp) -> DrawCall:
    return DrawCall(c.DRAW_RECT, (op.x, op.y, op.width, op.height), op.value)


def _fill_rect(op: FilledRectangleOp) -> DrawCall:
    return DrawCall(c.FILL_RECT, (op.x, op.y, op.width, op.height), op.value)


def _round_rect(op: RoundedRectangleOp) -> DrawCall:
    radius = corner_radius(op.width, op.height)
    return DrawCall(c.DRAW_ROUND_RECT, (op.x, op.y, op.width, op.height, radius), op.value)


def _fill_round_rect(op: FilledRoundedRectangleOp) -> DrawCall:
    radius = corner_radius(op.width, op.height)
    return DrawCall(c.FILL_ROUND_RECT, (op.x, op.y, op.width, op.height, radius), op.value)


def _circle(op: CircleOp) -> DrawCall:
    return DrawCall(c.DRAW_CIRCLE, (op.x, op.y, op.radius), op.value)


def _fill_circle(op: FilledCircleOp) -> DrawCall:
    return DrawCall(c.FILL_CIRCLE, (op.x, op.y, op.radius), op.value)


def _triangle_call(name: str, op: TriangleOp | FilledTriangleOp) -> DrawCall | None:
    # The editor draws nothing for a non-positive height.
    if op.height <= 0:
        return None
    p1, p2, p3 = triangle_vertices(op.top_x, op.top_y, op.width, op.height, WIDTH, HEIGHT)
    return DrawCall(name, (*p1, *p2, *p3), op.value)


def _triangle(op: TriangleOp) -> DrawCall | None:
    return _triangle_call(c.DRAW_TRIANGLE, op)


def _fill_triangle(op: FilledTriangleOp) -> DrawCall | None:
    return _triangle_call(c.FILL_TRIANGLE, op)


def _fill_screen(op: DrawingOperation) -> DrawCall:
    return DrawCall(c.FILL_SCREEN)


def _skip(op: DrawingOperation) -> None:
    return None


_REPLAYERS: dict[str, Callable[[DrawingOperation], DrawCall | None]] = {
    "PIXEL": _pixel,
    "LINE": _line,
    "FREEHAND_SEGMENT": _line,
    "FREEHAND_COMPLETE": _skip,
    "RECTANGLE": _rect,
    "FILLED_RECTANGLE": _fill_rect,
    "ROUNDED_RECTANGLE": _round_rect,
    "FILLED_ROUNDED_RECTANGLE": _fill_round_rect,
    "CIRCLE": _circle,
    "FILLED_CIRCLE": _fill_circle,
    "TRIANGLE": _triangle,
    "FILLED_TRIANGLE": _fill_triangle,
    "FILL_ALL": _fill_screen,
    # No faithful primitive exists; callers route such logs to shape recovery.
    "FLOOD_FILL": _skip,
    "IMPORT_IMAGE": _skip,
}

if set(_REPLAYERS) != OPERATION_KINDS:
    raise RuntimeError(f"Unhandled operation kinds: {OPERATION_KINDS ^ set(_REPLAYERS)}")


def replay_operation(op: DrawingOperation) -> DrawCall | None:
    return _REPLAYERS[op.kind](op)


def replay(log: Iterable[DrawingOperation]) -> list[DrawCall]:
    """Map a log to its calls, preserving order and skipping what cannot replay."""
    out: list[DrawCall] = []
    skipped = 0
    for op in log:
        call = replay_operation(op)
        if call is None:
            skipped += 1
            continue
        out.append(call)
    logger.debug("Replay: %d calls, %d operations without a call", len(out), skipped)
    return out


def replays_faithfully(log: list[DrawingOperation]) -> bool:
    """True when the replayed calls redraw exactly what the log renders.

    Besides the kinds that have no call at all, a filled rounded rectangle
    clears its corner pixels while ``fillRoundRect`` leaves them alone, so a
    log where one lands on lit corner pixels must go through shape recovery.
    """
    if not is_replayable(log):
        return False
    grid = new_grid()
    for op in log:
        if isinstance(op, FilledRoundedRectangleOp):
            corners = rounded_rectangle_corners(op.x, op.y, op.width, op.height)
            if any(grid[y, x] for x, y in corners):
                logger.debug("Filled rounded rectangle at (%d, %d) clears lit corners", op.x, op.y)
                return False
        apply_operation(grid, op)
    return True
