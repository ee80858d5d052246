"""Drawing operation models — one strongly typed variant per operation kind.

The operation log is an ordered list of these. Insertion order is causal order
and replay order; rendering the whole log onto an all-off grid must give back
the editor's grid bit-for-bit.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Operation(BaseModel):
    model_config = ConfigDict(frozen=True)


class PixelOp(_Operation):
    kind: Literal["PIXEL"] = "PIXEL"
    x: int
    y: int
    value: bool = True


class LineOp(_Operation):
    kind: Literal["LINE"] = "LINE"
    x1: int
    y1: int
    x2: int
    y2: int
    value: bool = True


class FreehandSegmentOp(_Operation):
    kind: Literal["FREEHAND_SEGMENT"] = "FREEHAND_SEGMENT"
    x1: int
    y1: int
    x2: int
    y2: int
    value: bool = True


class FreehandCompleteOp(_Operation):
    """Sentinel closing a freehand stroke. Draws nothing by itself."""

    kind: Literal["FREEHAND_COMPLETE"] = "FREEHAND_COMPLETE"
    start_x: int
    start_y: int
    end_x: int
    end_y: int
    value: bool = True


class RectangleOp(_Operation):
    kind: Literal["RECTANGLE"] = "RECTANGLE"
    x: int
    y: int
    width: int
    height: int
    value: bool = True


class FilledRectangleOp(_Operation):
    kind: Literal["FILLED_RECTANGLE"] = "FILLED_RECTANGLE"
    x: int
    y: int
    width: int
    height: int
    value: bool = True


class RoundedRectangleOp(_Operation):
    kind: Literal["ROUNDED_RECTANGLE"] = "ROUNDED_RECTANGLE"
    x: int
    y: int
    width: int
    height: int
    value: bool = True


class FilledRoundedRectangleOp(_Operation):
    kind: Literal["FILLED_ROUNDED_RECTANGLE"] = "FILLED_ROUNDED_RECTANGLE"
    x: int
    y: int
    width: int
    height: int
    value: bool = True


class CircleOp(_Operation):
    kind: Literal["CIRCLE"] = "CIRCLE"
    x: int
    y: int
    radius: int
    value: bool = True


class FilledCircleOp(_Operation):
    kind: Literal["FILLED_CIRCLE"] = "FILLED_CIRCLE"
    x: int
    y: int
    radius: int
    value: bool = True


class TriangleOp(_Operation):
    kind: Literal["TRIANGLE"] = "TRIANGLE"
    top_x: int
    top_y: int
    width: int
    height: int
    value: bool = True


class FilledTriangleOp(_Operation):
    kind: Literal["FILLED_TRIANGLE"] = "FILLED_TRIANGLE"
    top_x: int
    top_y: int
    width: int
    height: int
    value: bool = True


class FillAllOp(_Operation):
    kind: Literal["FILL_ALL"] = "FILL_ALL"


class FloodFillOp(_Operation):
    kind: Literal["FLOOD_FILL"] = "FLOOD_FILL"
    x: int
    y: int
    target_value: bool
    replacement_value: bool


class ImportImageOp(_Operation):
    """Whole-grid replacement. ``pixels`` is kept so the log stays renderable."""

    kind: Literal["IMPORT_IMAGE"] = "IMPORT_IMAGE"
    pixels: tuple[tuple[bool, ...], ...] | None = None


DrawingOperation = Annotated[
    Union[
        PixelOp,
        LineOp,
        FreehandSegmentOp,
        FreehandCompleteOp,
        RectangleOp,
        FilledRectangleOp,
        RoundedRectangleOp,
        FilledRoundedRectangleOp,
        CircleOp,
        FilledCircleOp,
        TriangleOp,
        FilledTriangleOp,
        FillAllOp,
        FloodFillOp,
        ImportImageOp,
    ],
    Field(discriminator="kind"),
]

OperationLog = list[DrawingOperation]

OPERATION_TYPES: tuple[type[_Operation], ...] = (
    PixelOp,
    LineOp,
    FreehandSegmentOp,
    FreehandCompleteOp,
    RectangleOp,
    FilledRectangleOp,
    RoundedRectangleOp,
    FilledRoundedRectangleOp,
    CircleOp,
    FilledCircleOp,
    TriangleOp,
    FilledTriangleOp,
    FillAllOp,
    FloodFillOp,
    ImportImageOp,
)

OPERATION_KINDS: frozenset[str] = frozenset(
    t.model_fields["kind"].default for t in OPERATION_TYPES
)

# Kinds with no faithful single-call equivalent. A log containing one of these
# should be compiled by shape recovery instead of replay.
NON_REPLAYABLE_KINDS: frozenset[str] = frozenset({"FLOOD_FILL", "IMPORT_IMAGE"})

_log_adapter: TypeAdapter[list[DrawingOperation]] = TypeAdapter(list[DrawingOperation])


def parse_log(data: list[dict]) -> OperationLog:
    """Validate raw dicts (e.g. decoded JSON) into typed operations."""
    return _log_adapter.validate_python(data)


def dump_log(log: OperationLog) -> list[dict]:
    return _log_adapter.dump_python(log, mode="json")


def is_replayable(log: OperationLog) -> bool:
    """True when every entry can be replayed as a primitive call."""
    return all(op.kind not in NON_REPLAYABLE_KINDS for op in log)
