"""Code generator — picks a strategy and wraps the calls in a display frame.

A non-empty operation log is replayed; without one the grid goes through
shape recovery. Either way the listing starts by clearing the display and
ends by flushing it, and the caller's grid is never modified.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from oledsketch.engine.calls import CLEAR_DISPLAY, FLUSH_DISPLAY, CallStyle, DrawCall
from oledsketch.engine.config import RecoveryConfig
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.pipeline import create_pipeline
from oledsketch.engine.replay import replay
from oledsketch.models.operations import DrawingOperation
from oledsketch.utils.grid import PixelGrid

logger = logging.getLogger(__name__)

REPLAY = "replay"
RECOVERY = "recovery"


@dataclass
class GenerationResult:
    mode: str
    lines: list[str]
    calls: list[DrawCall] = field(default_factory=list)
    elapsed_ms: float = 0.0
    completed_passes: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def code(self) -> str:
        return "\n".join(self.lines)


def generate_report(
    grid: PixelGrid,
    log: Sequence[DrawingOperation] = (),
    style: CallStyle | None = None,
    config: RecoveryConfig | None = None,
) -> GenerationResult:
    """Generate the listing for ``grid`` and report how it was produced."""
    style = style or CallStyle()
    start = time.perf_counter()

    completed: list[str] = []
    errors: dict[str, str] = {}
    if log:
        mode = REPLAY
        body = replay(log)
    else:
        mode = RECOVERY
        pipeline = create_pipeline(config)
        ctx = pipeline.run(RecoveryContext.from_pixels(grid, pipeline.config))
        body = ctx.calls
        completed = [pid for pid in pipeline.order() if pid in ctx.completed_passes]
        errors = dict(ctx.errors)

    calls = [DrawCall(CLEAR_DISPLAY), *body, DrawCall(FLUSH_DISPLAY)]
    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Generated %d calls by %s in %.1fms", len(body), mode, elapsed)
    return GenerationResult(
        mode=mode,
        lines=style.format_all(calls),
        calls=calls,
        elapsed_ms=round(elapsed, 2),
        completed_passes=completed,
        errors=errors,
    )


def generate_lines(
    grid: PixelGrid,
    log: Sequence[DrawingOperation] = (),
    style: CallStyle | None = None,
    config: RecoveryConfig | None = None,
) -> list[str]:
    return generate_report(grid, log, style, config).lines


def generate(
    grid: PixelGrid,
    log: Sequence[DrawingOperation] = (),
    style: CallStyle | None = None,
    config: RecoveryConfig | None = None,
) -> str:
    """Newline-joined listing reproducing ``grid``."""
    return generate_report(grid, log, style, config).code
