"""POST /api/bitmap — pack frames into page bitmaps and a C array."""

from __future__ import annotations

from fastapi import APIRouter

from oledsketch.engine.bitmap import format_frames, pack_pages
from oledsketch.models.requests import BitmapRequest
from oledsketch.models.responses import BitmapResponse
from oledsketch.utils.grid import as_grid

router = APIRouter()


@router.post("/bitmap", response_model=BitmapResponse)
async def bitmap(req: BitmapRequest) -> BitmapResponse:
    grids = [as_grid(frame, strict=True) for frame in req.frames]
    packed = [pack_pages(g) for g in grids]

    return BitmapResponse(
        frame_size=len(packed[0]),
        total_bytes=sum(len(p) for p in packed),
        frames=[p.hex() for p in packed],
        source=format_frames(grids, req.name),
    )
