"""POST /api/generate — compile a grid (and optionally its log) into calls."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from oledsketch.config import Settings
from oledsketch.dependencies import get_settings
from oledsketch.engine.generator import generate_report
from oledsketch.engine.replay import replays_faithfully
from oledsketch.models.requests import GenerateRequest
from oledsketch.models.responses import GenerateResponse
from oledsketch.utils.grid import as_grid

router = APIRouter()


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    req: GenerateRequest,
    settings: Settings = Depends(get_settings),
) -> GenerateResponse:
    grid = as_grid(req.pixels, strict=True)

    # Some logs have no call-for-call equivalent; those go through recovery.
    use_log = req.operations and not req.force_shape_recovery and replays_faithfully(req.operations)
    log = req.operations if use_log else []

    # Recovery is CPU-bound; keep it off the event loop
    result = await run_in_threadpool(generate_report, grid, log, style=settings.call_style())

    return GenerateResponse(
        code=result.code,
        lines=result.lines,
        mode=result.mode,
        processing_time_ms=result.elapsed_ms,
        passes_completed=result.completed_passes,
        errors=result.errors,
    )
