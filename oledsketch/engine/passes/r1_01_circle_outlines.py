"""R1.01 — Circle outlines.

Every interior position is a candidate centre, whether or not its own pixel is
on. Radii run from the configured minimum up to half the shorter side; the
first radius whose midpoint circle is entirely on wins. Discs that look solid
are left to R1.02.
"""

from __future__ import annotations

import math

import numpy as np

from oledsketch.engine.calls import DRAW_CIRCLE, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.detectors import RingMaps, centre_window, circle_map, is_circle, rings_filled
from oledsketch.engine.registry import Stage, recovery_pass


@recovery_pass(
    id="R1.01",
    stage=Stage.CURVES,
    description="Claim circle outlines (drawCircle)",
)
def circle_outlines(ctx: RecoveryContext) -> None:
    cfg = ctx.config
    grid = ctx.grid
    radii = list(range(cfg.circle_min_radius, math.ceil(min(ctx.width, ctx.height) / 2)))
    if not radii:
        return

    # Snapshot maps; the point-wise checks below re-test on the live grid.
    rings = RingMaps(grid, cfg)
    window = centre_window(grid.shape, cfg.circle_min_radius)
    candidates = np.stack([circle_map(grid, r, cfg) & ~rings.filled(r) & window for r in radii])

    for cy, cx in np.argwhere(candidates.any(axis=0)):
        cx, cy = int(cx), int(cy)
        for i, r in enumerate(radii):
            if not candidates[i, cy, cx]:
                continue
            if not is_circle(grid, cx, cy, r, cfg) or rings_filled(grid, cx, cy, r, cfg):
                continue
            if ctx.try_claim(DrawCall(DRAW_CIRCLE, (cx, cy, r))):
                break
