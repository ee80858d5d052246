"""R2.01 — Rounded rectangles.

A run starting on an otherwise empty row is taken as the straight part of a
top edge. Its corners are cut, so the box extends past both ends of the run by
some inset ``d``; the left column, read just below the top row, gives the
straight part of the left edge and the matching vertical inset. Corner radius
is then searched upward from the smallest, and the raster must match exactly.
"""

from __future__ import annotations

from oledsketch.engine.calls import DRAW_ROUND_RECT, FILL_ROUND_RECT, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.detectors import box_on, run_down, run_right
from oledsketch.engine.registry import Stage, recovery_pass


def _left_edge(ctx: RecoveryContext, left: int, top: int) -> tuple[int, int] | None:
    """(inset, straight length) of the left edge in column ``left``."""
    for e in range(ctx.config.max_corner_radius + 1):
        y = top + e
        if ctx.on(left, y):
            return e, run_down(ctx.grid, left, y)
    return None


def _square_corners(ctx: RecoveryContext, left: int, top: int, w: int, h: int) -> int:
    right, bottom = left + w - 1, top + h - 1
    corners = [(left, top), (right, top), (left, bottom), (right, bottom)]
    return sum(1 for x, y in corners if ctx.on(x, y))


def _try_box(ctx: RecoveryContext, left: int, top: int, w: int, h: int) -> bool:
    cfg = ctx.config
    if _square_corners(ctx, left, top, w, h) > cfg.rounded_rect_max_square_corners:
        return False
    max_radius = min(min(w, h) // 4, cfg.max_corner_radius)
    for r in range(cfg.rounded_rect_min_radius, max_radius + 1):
        filled = box_on(ctx.grid, left + r, top + r, w - 2 * r, h - 2 * r)
        name = FILL_ROUND_RECT if filled else DRAW_ROUND_RECT
        if ctx.try_claim(DrawCall(name, (left, top, w, h, r))):
            return True
    return False


@recovery_pass(
    id="R2.01",
    stage=Stage.BOXES,
    dependencies=["R1.03"],
    description="Claim rounded rectangles (drawRoundRect / fillRoundRect)",
)
def rounded_rectangles(ctx: RecoveryContext) -> None:
    cfg = ctx.config
    grid = ctx.grid
    min_size = cfg.rounded_rect_min_size

    for y in range(ctx.height - min_size + 1):
        for x in range(ctx.width):
            # Only runs that start here and have nothing directly above.
            if not grid[y, x] or ctx.on(x - 1, y) or ctx.on(x, y - 1):
                continue
            run_w = run_right(grid, x, y)
            for d in range(cfg.max_corner_radius, -1, -1):
                left = x - d
                w = run_w + 2 * d
                if left < 0 or left + w > ctx.width or w < min_size:
                    continue
                edge = _left_edge(ctx, left, y)
                if edge is None:
                    continue
                e, run_h = edge
                h = run_h + 2 * e
                if y + h > ctx.height or h < min_size:
                    continue
                if _try_box(ctx, left, y, w, h):
                    break
