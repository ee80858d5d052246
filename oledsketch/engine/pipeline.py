"""Recovery pipeline — runs detect-and-erase passes in their resolved order."""

from __future__ import annotations

import logging
import time

from oledsketch.engine.calls import DrawCall
from oledsketch.engine.config import RecoveryConfig
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.registry import PassRegistry, get_registry
from oledsketch.utils.grid import PixelGrid

logger = logging.getLogger(__name__)

DIAGONAL_RUNS_PASS = "R3.03"


class RecoveryPipeline:
    """Orchestrates the shape-recovery passes."""

    def __init__(
        self,
        registry: PassRegistry | None = None,
        config: RecoveryConfig | None = None,
        disabled: set[str] | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or RecoveryConfig()
        self.disabled = set(disabled or ())

    def order(self) -> list[str]:
        """Pass IDs in execution order."""
        return [s.id for s in self._ordered()]

    def run(self, ctx: RecoveryContext) -> RecoveryContext:
        """Run every enabled pass on the given context."""
        start = time.perf_counter()
        ordered = self._ordered()
        initial = ctx.remaining

        logger.info("Recovery: %d passes queued, %d pixels on", len(ordered), initial)

        for spec in ordered:
            t0 = time.perf_counter()
            ctx.current_pass = spec.id
            before = len(ctx.claims)
            try:
                spec.fn(ctx)
                ctx.completed_passes.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug(
                    "  %s completed in %.1fms (%d calls)",
                    spec.id,
                    elapsed,
                    len(ctx.claims) - before,
                )
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        ctx.current_pass = ""

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Recovery complete: %d calls for %d pixels, %d/%d passes in %.0fms",
            len(ctx.claims),
            initial,
            len(ctx.completed_passes),
            len(ordered),
            total,
        )
        return ctx

    def recover(self, pixels: PixelGrid) -> list[DrawCall]:
        """Recover calls for ``pixels`` without touching the caller's grid."""
        ctx = RecoveryContext.from_pixels(pixels, self.config)
        return self.run(ctx).calls

    def _ordered(self):
        skip = set(self.disabled)
        if not self.config.detect_diagonal_runs:
            skip.add(DIAGONAL_RUNS_PASS)
        requested = {s.id for s in self.registry.all()} - skip
        return self.registry.resolve_order(requested)


def create_pipeline(
    config: RecoveryConfig | None = None,
    disabled: set[str] | None = None,
) -> RecoveryPipeline:
    """Factory for a pipeline over the default registry with all passes loaded."""
    from oledsketch.engine.passes import register_passes

    register_passes()
    return RecoveryPipeline(config=config, disabled=disabled)


def recover(pixels: PixelGrid, config: RecoveryConfig | None = None) -> list[DrawCall]:
    """Shape recovery over a private copy of ``pixels``."""
    return create_pipeline(config).recover(pixels)
