"""R2.03 — Rectangle outlines.

A top-left corner has on pixels to its right and below. The runs from there
give the box, and all four borders must be on.
"""

from __future__ import annotations

from oledsketch.engine.calls import DRAW_RECT, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.detectors import border_on, run_down, run_right
from oledsketch.engine.registry import Stage, recovery_pass


@recovery_pass(
    id="R2.03",
    stage=Stage.BOXES,
    dependencies=["R2.02"],
    description="Claim rectangle outlines (drawRect)",
)
def rectangle_outlines(ctx: RecoveryContext) -> None:
    grid = ctx.grid
    min_size = ctx.config.rect_min_size
    for y in range(ctx.height - min_size + 1):
        for x in range(ctx.width - min_size + 1):
            if not (grid[y, x] and ctx.on(x + 1, y) and ctx.on(x, y + 1)):
                continue
            w = run_right(grid, x, y)
            h = run_down(grid, x, y)
            if w < min_size or h < min_size:
                continue
            if border_on(grid, x, y, w, h):
                ctx.try_claim(DrawCall(DRAW_RECT, (x, y, w, h)))
