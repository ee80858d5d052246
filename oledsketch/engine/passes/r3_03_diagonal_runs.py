"""R3.03 — Diagonal runs.

45° runs in both directions, as drawLine. Bresenham between the run ends
covers exactly the run. Disabled with ``detect_diagonal_runs=False``.
"""

from __future__ import annotations

from oledsketch.engine.calls import DRAW_LINE, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.registry import Stage, recovery_pass

# (dx, dy) per direction: down-right, then down-left.
_DIRECTIONS = ((1, 1), (-1, 1))


@recovery_pass(
    id="R3.03",
    stage=Stage.RUNS,
    dependencies=["R3.02"],
    description="Claim 45-degree runs (drawLine)",
)
def diagonal_runs(ctx: RecoveryContext) -> None:
    min_length = ctx.config.min_run_length
    for dx, dy in _DIRECTIONS:
        for y in range(ctx.height):
            for x in range(ctx.width):
                # Start of a run: on, with nothing one step back along it.
                if not ctx.on(x, y) or ctx.on(x - dx, y - dy):
                    continue
                length = 1
                while ctx.on(x + dx * length, y + dy * length):
                    length += 1
                if length >= min_length:
                    end_x = x + dx * (length - 1)
                    end_y = y + dy * (length - 1)
                    ctx.try_claim(DrawCall(DRAW_LINE, (x, y, end_x, end_y)))
