"""Tests for operation replay."""

from __future__ import annotations

import numpy as np

from oledsketch.engine import calls as c
from oledsketch.engine.calls import DrawCall
from oledsketch.engine.generator import generate
from oledsketch.engine.render import render
from oledsketch.engine.replay import replay, replay_operation, replays_faithfully
from oledsketch.models.operations import (
    CircleOp,
    FillAllOp,
    FilledCircleOp,
    FilledRectangleOp,
    FilledRoundedRectangleOp,
    FilledTriangleOp,
    FloodFillOp,
    FreehandCompleteOp,
    FreehandSegmentOp,
    ImportImageOp,
    LineOp,
    PixelOp,
    RectangleOp,
    RoundedRectangleOp,
    TriangleOp,
)
from tests.conftest import run_listing


def test_pixel_and_line():
    assert replay_operation(PixelOp(x=1, y=2)) == DrawCall(c.DRAW_PIXEL, (1, 2))
    assert replay_operation(LineOp(x1=0, y1=0, x2=9, y2=4, value=False)) == DrawCall(
        c.DRAW_LINE, (0, 0, 9, 4), on=False
    )


def test_freehand_segment_is_a_line():
    call = replay_operation(FreehandSegmentOp(x1=1, y1=1, x2=2, y2=3))
    assert call == DrawCall(c.DRAW_LINE, (1, 1, 2, 3))


def test_rounded_rectangle_carries_corner_radius():
    call = replay_operation(RoundedRectangleOp(x=10, y=10, width=30, height=20))
    assert call == DrawCall(c.DRAW_ROUND_RECT, (10, 10, 30, 20, 5))
    call = replay_operation(FilledRoundedRectangleOp(x=0, y=0, width=8, height=12))
    assert call == DrawCall(c.FILL_ROUND_RECT, (0, 0, 8, 12, 2))


def test_triangle_uses_vertices():
    call = replay_operation(TriangleOp(top_x=20, top_y=10, width=10, height=8))
    assert call == DrawCall(c.DRAW_TRIANGLE, (20, 10, 15, 18, 25, 18))


def test_flat_triangle_has_no_call():
    assert replay_operation(FilledTriangleOp(top_x=20, top_y=10, width=10, height=0)) is None


def test_fill_all_is_fill_screen():
    assert replay_operation(FillAllOp()) == DrawCall(c.FILL_SCREEN)


def test_skipped_kinds():
    assert replay_operation(FreehandCompleteOp(start_x=0, start_y=0, end_x=1, end_y=1)) is None
    assert replay_operation(FloodFillOp(x=0, y=0, target_value=False, replacement_value=True)) is None
    assert replay_operation(ImportImageOp()) is None


def test_replay_preserves_order():
    log = [
        CircleOp(x=64, y=32, radius=10),
        PixelOp(x=0, y=0),
        FreehandCompleteOp(start_x=0, start_y=0, end_x=0, end_y=0),
        RectangleOp(x=1, y=1, width=5, height=5),
    ]
    assert [call.name for call in replay(log)] == [c.DRAW_CIRCLE, c.DRAW_PIXEL, c.DRAW_RECT]


def test_replayed_listing_draws_the_log():
    log = [
        FillAllOp(),
        FilledRectangleOp(x=0, y=0, width=128, height=64, value=False),
        PixelOp(x=3, y=3),
        LineOp(x1=0, y1=63, x2=127, y2=40),
        RectangleOp(x=5, y=5, width=20, height=12),
        RoundedRectangleOp(x=30, y=5, width=30, height=20),
        FilledRoundedRectangleOp(x=70, y=5, width=25, height=15),
        CircleOp(x=20, y=45, radius=12),
        FilledCircleOp(x=110, y=45, radius=9),
        TriangleOp(top_x=60, top_y=30, width=20, height=25),
        FilledTriangleOp(top_x=85, top_y=30, width=15, height=20),
        FreehandSegmentOp(x1=100, y1=2, x2=126, y2=20),
        FreehandCompleteOp(start_x=100, start_y=2, end_x=126, end_y=20),
        CircleOp(x=20, y=45, radius=6, value=False),
    ]
    assert replays_faithfully(log)
    assert np.array_equal(run_listing(generate(render(log), log)), render(log))


# ---------------------------------------------------------------------------
# Faithfulness
# ---------------------------------------------------------------------------


def test_rounded_fill_on_blank_corners_replays():
    log = [PixelOp(x=10, y=10), FilledRoundedRectangleOp(x=0, y=0, width=20, height=20)]
    assert replays_faithfully(log)
    assert np.array_equal(run_listing(generate(render(log), log)), render(log))


def test_rounded_fill_over_lit_corners_does_not_replay():
    log = [
        FilledRectangleOp(x=0, y=0, width=20, height=20),
        FilledRoundedRectangleOp(x=0, y=0, width=20, height=20),
    ]
    assert not replays_faithfully(log)
    # fillRoundRect leaves the corners lit
    assert run_listing(generate(render(log), log))[0, 0]


def test_non_replayable_kinds_are_not_faithful():
    assert replays_faithfully([])
    assert not replays_faithfully([PixelOp(x=0, y=0), ImportImageOp()])
    assert not replays_faithfully([FloodFillOp(x=1, y=1, target_value=False, replacement_value=True)])
