"""Tests for the drawing operation models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from oledsketch.models.operations import (
    NON_REPLAYABLE_KINDS,
    OPERATION_KINDS,
    CircleOp,
    FloodFillOp,
    LineOp,
    PixelOp,
    dump_log,
    is_replayable,
    parse_log,
)


def test_fifteen_kinds():
    assert len(OPERATION_KINDS) == 15
    assert NON_REPLAYABLE_KINDS <= OPERATION_KINDS


def test_parse_log_dispatches_on_kind():
    log = parse_log(
        [
            {"kind": "PIXEL", "x": 1, "y": 2},
            {"kind": "CIRCLE", "x": 64, "y": 32, "radius": 10, "value": False},
        ]
    )
    assert isinstance(log[0], PixelOp)
    assert log[0].value is True
    assert isinstance(log[1], CircleOp)
    assert log[1].value is False


def test_parse_log_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        parse_log([{"kind": "SPIRAL", "x": 1}])


def test_parse_log_rejects_missing_field():
    with pytest.raises(ValidationError):
        parse_log([{"kind": "LINE", "x1": 0, "y1": 0, "x2": 4}])


def test_operations_are_frozen():
    op = PixelOp(x=1, y=1)
    with pytest.raises(ValidationError):
        op.x = 2


def test_dump_then_parse():
    log = [LineOp(x1=0, y1=0, x2=5, y2=5), FloodFillOp(x=1, y=1, target_value=False, replacement_value=True)]
    dumped = dump_log(log)
    assert dumped[0]["kind"] == "LINE"
    assert parse_log(dumped) == log


def test_is_replayable():
    assert is_replayable([])
    assert is_replayable([PixelOp(x=0, y=0), LineOp(x1=0, y1=0, x2=1, y2=1)])
    assert not is_replayable([PixelOp(x=0, y=0), FloodFillOp(x=1, y=1, target_value=False, replacement_value=True)])
