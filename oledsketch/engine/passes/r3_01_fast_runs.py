"""R3.01 — Axis-aligned runs as fast lines.

Rows first, then columns; runs shorter than ``min_run_length`` stay behind for
the later passes.
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from oledsketch.engine.calls import DRAW_FAST_HLINE, DRAW_FAST_VLINE, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.registry import Stage, recovery_pass
from oledsketch.utils.grid import PixelGrid


def runs(line: PixelGrid, min_length: int) -> Iterator[tuple[int, int]]:
    """(start, length) of each on run in a 1-D array, in order."""
    padded = np.concatenate(([False], line, [False])).astype(np.int8)
    edges = np.flatnonzero(np.diff(padded))
    for start, stop in zip(edges[::2], edges[1::2]):
        if stop - start >= min_length:
            yield int(start), int(stop - start)


@recovery_pass(
    id="R3.01",
    stage=Stage.RUNS,
    dependencies=["R2.03"],
    description="Claim horizontal and vertical runs (drawFastHLine / drawFastVLine)",
)
def fast_runs(ctx: RecoveryContext) -> None:
    grid = ctx.grid
    min_length = ctx.config.min_run_length
    for y in range(ctx.height):
        for x, length in list(runs(grid[y, :], min_length)):
            ctx.try_claim(DrawCall(DRAW_FAST_HLINE, (x, y, length)))
    for x in range(ctx.width):
        for y, length in list(runs(grid[:, x], min_length)):
            ctx.try_claim(DrawCall(DRAW_FAST_VLINE, (x, y, length)))
