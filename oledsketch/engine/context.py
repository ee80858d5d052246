"""RecoveryContext — the single mutable state object flowing through all passes.

``grid`` is the working copy: on pixels are the ones no pass has explained yet.
Passes only remove pixels from it, through :meth:`RecoveryContext.claim`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from oledsketch.engine.calls import DrawCall, points_for
from oledsketch.engine.config import RecoveryConfig
from oledsketch.utils.geometry import Point
from oledsketch.utils.grid import PixelGrid, new_grid

logger = logging.getLogger(__name__)


@dataclass
class Claim:
    """One emitted call and the pixels it explained."""

    call: DrawCall
    pass_id: str
    pixels: int


@dataclass
class RecoveryContext:
    grid: PixelGrid = field(default_factory=new_grid)
    config: RecoveryConfig = field(default_factory=RecoveryConfig)
    claims: list[Claim] = field(default_factory=list)
    completed_passes: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    current_pass: str = ""

    @classmethod
    def from_pixels(cls, pixels: PixelGrid, config: RecoveryConfig | None = None) -> RecoveryContext:
        """Build a context around a private copy of ``pixels``."""
        return cls(grid=np.array(pixels, dtype=np.bool_, copy=True), config=config or RecoveryConfig())

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    @property
    def calls(self) -> list[DrawCall]:
        return [c.call for c in self.claims]

    @property
    def remaining(self) -> int:
        return int(np.count_nonzero(self.grid))

    def on(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and bool(self.grid[y, x])

    def raster(self, call: DrawCall) -> list[Point]:
        return points_for(call, self.width, self.height)

    def covers(self, points: list[Point]) -> bool:
        """True when every point is an unexplained on pixel."""
        if not points:
            return False
        xs = np.fromiter((p[0] for p in points), dtype=np.intp, count=len(points))
        ys = np.fromiter((p[1] for p in points), dtype=np.intp, count=len(points))
        return bool(np.all(self.grid[ys, xs]))

    def try_claim(self, call: DrawCall) -> bool:
        """Claim ``call`` if everything it draws is still unexplained."""
        points = self.raster(call)
        if not self.covers(points):
            return False
        self.claim(call, points)
        return True

    def claim(self, call: DrawCall, points: list[Point]) -> None:
        """Emit ``call`` and erase ``points`` from the working copy."""
        for x, y in points:
            self.grid[y, x] = False
        self.claims.append(Claim(call=call, pass_id=self.current_pass, pixels=len(points)))
        logger.debug("  %s: %s%s (%d px)", self.current_pass, call.name, call.args, len(points))
