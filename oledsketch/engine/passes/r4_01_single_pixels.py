"""R4.01 — Single pixels. Whatever is left becomes drawPixel, so recovery is
always lossless."""

from __future__ import annotations

import numpy as np

from oledsketch.engine.calls import DRAW_PIXEL, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.registry import Stage, recovery_pass


@recovery_pass(
    id="R4.01",
    stage=Stage.FALLBACK,
    dependencies=["R3.03"],
    description="Emit remaining pixels (drawPixel)",
)
def single_pixels(ctx: RecoveryContext) -> None:
    for y, x in np.argwhere(ctx.grid):
        point = (int(x), int(y))
        ctx.claim(DrawCall(DRAW_PIXEL, point), [point])
