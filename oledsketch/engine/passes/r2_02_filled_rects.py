"""R2.02 — Filled rectangles.

Top-left corner scan; width and height come from the runs right and down from
the corner and the whole box must be on.
"""

from __future__ import annotations

from oledsketch.engine.calls import FILL_RECT, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.detectors import box_on, run_down, run_right
from oledsketch.engine.registry import Stage, recovery_pass


@recovery_pass(
    id="R2.02",
    stage=Stage.BOXES,
    dependencies=["R2.01"],
    description="Claim filled rectangles (fillRect)",
)
def filled_rectangles(ctx: RecoveryContext) -> None:
    grid = ctx.grid
    min_size = ctx.config.rect_min_size
    for y in range(ctx.height - min_size + 1):
        for x in range(ctx.width - min_size + 1):
            if not grid[y, x]:
                continue
            w = run_right(grid, x, y)
            h = run_down(grid, x, y)
            if w < min_size or h < min_size:
                continue
            if box_on(grid, x, y, w, h):
                ctx.try_claim(DrawCall(FILL_RECT, (x, y, w, h)))
