"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    passes_registered: int = 0


class GenerateResponse(BaseModel):
    code: str
    lines: list[str] = Field(default_factory=list)
    mode: str = "recovery"
    processing_time_ms: float = 0.0
    passes_completed: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)


class BitmapResponse(BaseModel):
    frame_size: int
    total_bytes: int
    frames: list[str] = Field(default_factory=list, description="Hex-encoded page bytes per frame")
    source: str = ""
