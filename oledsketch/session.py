"""Editor session — the stateful shell around the drawing core.

A session owns the pixel grid, the operation log and an undo history of grid
snapshots. Every completed action goes through :func:`apply_operation` and is
appended to the log, so rendering the log reproduces the grid. Undo steps back
one snapshot and drops the most recent log entry; redo steps forward without
restoring that entry.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from oledsketch.engine.calls import CallStyle
from oledsketch.engine.config import RecoveryConfig
from oledsketch.engine.generator import GenerationResult, generate_report
from oledsketch.engine.render import apply_operation
from oledsketch.engine.replay import replays_faithfully
from oledsketch.models.operations import (
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
    OperationLog,
    PixelOp,
    RectangleOp,
    RoundedRectangleOp,
    TriangleOp,
)
from oledsketch.utils.geometry import Point, distance, round_half_up
from oledsketch.utils.grid import PixelGrid, as_grid, in_bounds, new_grid

logger = logging.getLogger(__name__)


def _box(x0: int, y0: int, x1: int, y1: int) -> dict[str, int]:
    """Normalized left/top and inclusive size of the box spanned by two corners."""
    return {
        "x": min(x0, x1),
        "y": min(y0, y1),
        "width": abs(x1 - x0) + 1,
        "height": abs(y1 - y0) + 1,
    }


class EditorSession:
    """A drawing session on one 128×64 grid."""

    def __init__(self, fill_value: bool = True) -> None:
        self.fill_value = fill_value
        self.grid: PixelGrid = new_grid()
        self.log: OperationLog = []
        self._history: list[PixelGrid] = [self.grid.copy()]
        self._position = 0
        # Freehand stroke in progress: start point, last point, moved yet
        self._stroke_start: Point | None = None
        self._stroke_last: Point | None = None
        self._stroke_moved = False

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _apply(self, op: DrawingOperation) -> None:
        apply_operation(self.grid, op)
        self.log.append(op)

    def _checkpoint(self) -> None:
        """Close one undoable action."""
        del self._history[self._position + 1 :]
        self._history.append(self.grid.copy())
        self._position += 1

    def _record(self, op: DrawingOperation) -> None:
        self._apply(op)
        self._checkpoint()
        logger.debug("Recorded %s", op.kind)

    @property
    def can_undo(self) -> bool:
        return self._position > 0

    @property
    def can_redo(self) -> bool:
        return self._position < len(self._history) - 1

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    def set_pixel(self, x: int, y: int, value: bool | None = None) -> None:
        """Write ``value`` at (x, y), or toggle it when ``value`` is None."""
        if not in_bounds(self.grid, x, y):
            return
        written = (not self.grid[y, x]) if value is None else value
        self._record(PixelOp(x=x, y=y, value=bool(written)))

    def draw_line(self, x0: int, y0: int, x1: int, y1: int) -> None:
        self._record(LineOp(x1=x0, y1=y0, x2=x1, y2=y1, value=self.fill_value))

    def draw_rectangle(self, x0: int, y0: int, x1: int, y1: int, filled: bool = False) -> None:
        op_type = FilledRectangleOp if filled else RectangleOp
        self._record(op_type(**_box(x0, y0, x1, y1), value=self.fill_value))

    def draw_rounded_rectangle(
        self, x0: int, y0: int, x1: int, y1: int, filled: bool = False
    ) -> None:
        op_type = FilledRoundedRectangleOp if filled else RoundedRectangleOp
        self._record(op_type(**_box(x0, y0, x1, y1), value=self.fill_value))

    def draw_circle(self, cx: int, cy: int, ex: int, ey: int, filled: bool = False) -> None:
        """Circle centred at (cx, cy) passing through the drag end (ex, ey)."""
        radius = round_half_up(distance((cx, cy), (ex, ey)))
        op_type = FilledCircleOp if filled else CircleOp
        self._record(op_type(x=cx, y=cy, radius=radius, value=self.fill_value))

    def draw_triangle(self, x0: int, y0: int, x1: int, y1: int, filled: bool = False) -> None:
        """Isosceles triangle with its apex at the drag start.

        The drag's horizontal extent is half the base, its vertical extent the
        height. Dragging upward gives a non-positive height, which draws
        nothing but is still recorded.
        """
        op_type = FilledTriangleOp if filled else TriangleOp
        self._record(
            op_type(
                top_x=x0,
                top_y=y0,
                width=abs(x1 - x0) * 2,
                height=y1 - y0,
                value=self.fill_value,
            )
        )

    def begin_freehand(self, x: int, y: int) -> None:
        self._stroke_start = self._stroke_last = (x, y)
        self._stroke_moved = False
        if in_bounds(self.grid, x, y):
            self.grid[y, x] = self.fill_value

    def extend_freehand(self, x: int, y: int) -> None:
        """Continue the stroke to (x, y), one segment per move."""
        if self._stroke_last is None:
            self.begin_freehand(x, y)
            return
        if (x, y) == self._stroke_last:
            return
        lx, ly = self._stroke_last
        self._apply(FreehandSegmentOp(x1=lx, y1=ly, x2=x, y2=y, value=self.fill_value))
        self._stroke_last = (x, y)
        self._stroke_moved = True

    def end_freehand(self, x: int, y: int) -> None:
        """Finish the stroke. The whole stroke is one undo step."""
        if self._stroke_start is None:
            return
        self.extend_freehand(x, y)
        sx, sy = self._stroke_start
        if not self._stroke_moved:
            # Log the lone start pixel so the log still renders to the grid.
            self._apply(FreehandSegmentOp(x1=sx, y1=sy, x2=sx, y2=sy, value=self.fill_value))
        self._record(FreehandCompleteOp(start_x=sx, start_y=sy, end_x=x, end_y=y, value=self.fill_value))
        self._stroke_start = self._stroke_last = None
        self._stroke_moved = False

    def flood_fill(self, x: int, y: int) -> None:
        """Fill the 4-connected region around (x, y) with the fill value."""
        if not in_bounds(self.grid, x, y) or bool(self.grid[y, x]) == self.fill_value:
            return
        self._record(
            FloodFillOp(
                x=x,
                y=y,
                target_value=bool(self.grid[y, x]),
                replacement_value=self.fill_value,
            )
        )

    def import_image(self, pixels: PixelGrid | Sequence[Sequence[bool]]) -> None:
        """Replace the whole grid with an already thresholded image.

        Raises:
            GridShapeError: The image is not 64 rows of 128 pixels.
        """
        image = as_grid(pixels, strict=True)
        rows = tuple(tuple(bool(v) for v in row) for row in image.tolist())
        self._record(ImportImageOp(pixels=rows))

    def fill_all(self) -> None:
        self._record(FillAllOp())

    def clear(self) -> None:
        """Blank grid, empty log, fresh history."""
        self.grid = new_grid()
        self.log = []
        self._history = [self.grid.copy()]
        self._position = 0
        self._stroke_start = self._stroke_last = None
        self._stroke_moved = False

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        """Step back one action. Returns False when there is nothing to undo."""
        if not self.can_undo:
            return False
        self._position -= 1
        self.grid = self._history[self._position].copy()
        if self.log:
            self.log.pop()
        return True

    def redo(self) -> bool:
        """Step forward one action. The log entry dropped by undo stays dropped."""
        if not self.can_redo:
            return False
        self._position += 1
        self.grid = self._history[self._position].copy()
        return True

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def uses_replay(self, force_shape_recovery: bool = False) -> bool:
        """Replay only a non-empty log whose calls redraw exactly the current grid."""
        return not force_shape_recovery and bool(self.log) and replays_faithfully(self.log)

    def generate_report(
        self,
        force_shape_recovery: bool = False,
        style: CallStyle | None = None,
        config: RecoveryConfig | None = None,
    ) -> GenerationResult:
        log = self.log if self.uses_replay(force_shape_recovery) else []
        return generate_report(self.grid, log, style, config)

    def generate_code(
        self,
        force_shape_recovery: bool = False,
        style: CallStyle | None = None,
        config: RecoveryConfig | None = None,
    ) -> str:
        return self.generate_report(force_shape_recovery, style, config).code
