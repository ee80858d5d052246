"""R3.02 — Axis-aligned runs as lines.

Same scan as R3.01 but emitting drawLine. With R3.01 enabled nothing is left
for it; it takes over when R3.01 is disabled.
"""

from __future__ import annotations

from oledsketch.engine.calls import DRAW_LINE, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.passes.r3_01_fast_runs import runs
from oledsketch.engine.registry import Stage, recovery_pass


@recovery_pass(
    id="R3.02",
    stage=Stage.RUNS,
    dependencies=["R3.01"],
    description="Claim remaining horizontal and vertical runs (drawLine)",
)
def line_runs(ctx: RecoveryContext) -> None:
    grid = ctx.grid
    min_length = ctx.config.min_run_length
    for y in range(ctx.height):
        for x, length in list(runs(grid[y, :], min_length)):
            ctx.try_claim(DrawCall(DRAW_LINE, (x, y, x + length - 1, y)))
    for x in range(ctx.width):
        for y, length in list(runs(grid[:, x], min_length)):
            ctx.try_claim(DrawCall(DRAW_LINE, (x, y, x, y + length - 1)))
