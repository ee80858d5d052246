"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from oledsketch.errors import GridShapeError
from oledsketch.models.operations import DrawingOperation
from oledsketch.utils.grid import HEIGHT, WIDTH


def _check_grid(rows: list[list[bool]]) -> list[list[bool]]:
    if len(rows) != HEIGHT or any(len(row) != WIDTH for row in rows):
        widths = sorted({len(row) for row in rows})
        raise GridShapeError((len(rows), *widths), (HEIGHT, WIDTH))
    return rows


class GenerateRequest(BaseModel):
    pixels: list[list[bool]] = Field(..., description="64 rows of 128 pixels, row-major")
    operations: list[DrawingOperation] = Field(
        default_factory=list,
        description="Operation log that produced the pixels, oldest first",
    )
    force_shape_recovery: bool = Field(
        default=False,
        description="Ignore the operation log and recover shapes from the pixels",
    )

    @field_validator("pixels")
    @classmethod
    def _pixels_fit_display(cls, v: list[list[bool]]) -> list[list[bool]]:
        return _check_grid(v)


class BitmapRequest(BaseModel):
    frames: list[list[list[bool]]] = Field(..., min_length=1, description="One grid per frame")
    name: str = Field(
        default="frame_data",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="C identifier for the generated array",
    )

    @field_validator("frames")
    @classmethod
    def _frames_fit_display(cls, v: list[list[list[bool]]]) -> list[list[list[bool]]]:
        return [_check_grid(frame) for frame in v]
