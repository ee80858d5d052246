"""R1.02 — Filled circles.

A disc needs its perimeter, inner rings and centre on, and a mostly-off ring
just outside it, so that arcs cut from a larger solid area are not taken for
circles. Larger discs are claimed before smaller ones.
"""

from __future__ import annotations

import math

import numpy as np

from oledsketch.engine.calls import FILL_CIRCLE, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.detectors import (
    RingMaps,
    centre_window,
    circle_map,
    halo_map,
    is_filled_circle,
)
from oledsketch.engine.registry import Stage, recovery_pass


@recovery_pass(
    id="R1.02",
    stage=Stage.CURVES,
    dependencies=["R1.01"],
    description="Claim filled circles (fillCircle)",
)
def filled_circles(ctx: RecoveryContext) -> None:
    cfg = ctx.config
    grid = ctx.grid
    radii = range(cfg.filled_circle_min_radius, math.ceil(min(ctx.width, ctx.height) / 3))

    rings = RingMaps(grid, cfg)
    window = centre_window(grid.shape, cfg.filled_circle_min_radius)
    candidates: list[tuple[int, int, int]] = []
    for r in radii:
        found = circle_map(grid, r, cfg, inward=True) & rings.filled(r) & halo_map(grid, r, cfg) & window
        candidates.extend((r, int(cy), int(cx)) for cy, cx in np.argwhere(found))
    candidates.sort(key=lambda c: (-c[0], c[1], c[2]))

    for r, cy, cx in candidates:
        if not grid[cy, cx]:
            continue
        if is_filled_circle(grid, cx, cy, r, cfg):
            ctx.try_claim(DrawCall(FILL_CIRCLE, (cx, cy, r)))
