"""End-to-end tests for code generation by shape recovery and replay."""

from __future__ import annotations

import numpy as np
import pytest

from oledsketch.engine.config import RecoveryConfig
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.generator import RECOVERY, REPLAY, generate, generate_lines, generate_report
from oledsketch.engine.pipeline import create_pipeline
from oledsketch.engine.render import render
from oledsketch.models.operations import (
    CircleOp,
    FilledRoundedRectangleOp,
    FilledTriangleOp,
    PixelOp,
    TriangleOp,
)
from oledsketch.utils import rasterizer as rz
from oledsketch.utils.grid import count_on, full_grid
from tests.conftest import (
    CLEAR_LINE,
    FLUSH_LINE,
    block_grid,
    circle_grid,
    disc_grid,
    grid_with,
    pixel_grid,
    random_grid,
    run_listing,
)


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------


def test_blank_grid(blank):
    assert generate_lines(blank) == [CLEAR_LINE, FLUSH_LINE]


def test_single_pixel():
    assert generate_lines(pixel_grid(5, 5)) == [
        CLEAR_LINE,
        "display.drawPixel(5, 5, SSD1306_WHITE);",
        FLUSH_LINE,
    ]


def test_code_is_newline_joined(blank):
    assert generate(blank) == f"{CLEAR_LINE}\n{FLUSH_LINE}"


# ---------------------------------------------------------------------------
# Recovered shapes
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("grid", "expected"),
    [
        (block_grid(0, 0, 3, 3), "display.fillRect(0, 0, 3, 3, SSD1306_WHITE);"),
        (circle_grid(64, 32, 10), "display.drawCircle(64, 32, 10, SSD1306_WHITE);"),
        (disc_grid(40, 30, 8), "display.fillCircle(40, 30, 8, SSD1306_WHITE);"),
        (grid_with(rz.rectangle_box(10, 10, 20, 10)), "display.drawRect(10, 10, 20, 10, SSD1306_WHITE);"),
        (
            grid_with(rz.rounded_rectangle_outline(10, 10, 30, 20)),
            "display.drawRoundRect(10, 10, 30, 20, 5, SSD1306_WHITE);",
        ),
        (full_grid(), "display.fillRect(0, 0, 128, 64, SSD1306_WHITE);"),
    ],
)
def test_single_shape(grid, expected):
    assert generate_lines(grid) == [CLEAR_LINE, expected, FLUSH_LINE]


def test_smiley_is_lossless(smiley):
    code = generate(smiley)
    assert np.array_equal(run_listing(code), smiley)
    assert len(code.splitlines()) < count_on(smiley) // 2


def test_triangle_is_lossless():
    grid = grid_with(
        rz.triangle_outline((20, 10), (10, 30), (40, 30)),
        rz.triangle_filled((80, 10), (65, 40), (100, 40)),
    )
    assert np.array_equal(run_listing(generate(grid)), grid)


@pytest.mark.parametrize(
    ("op", "line"),
    [
        (
            FilledRoundedRectangleOp(x=10, y=10, width=30, height=20),
            "display.fillRoundRect(10, 10, 30, 20, 5, SSD1306_WHITE);",
        ),
        (
            TriangleOp(top_x=60, top_y=10, width=40, height=30),
            "display.drawTriangle(60,10,40,40,80,40, SSD1306_WHITE);",
        ),
        (
            FilledTriangleOp(top_x=60, top_y=10, width=30, height=25),
            "display.fillTriangle(60,10,45,35,75,35, SSD1306_WHITE);",
        ),
    ],
)
def test_drawn_shape_is_recovered_as_one_call(op, line):
    assert generate_lines(render([op])) == [CLEAR_LINE, line, FLUSH_LINE]


@pytest.mark.parametrize(("seed", "density"), [(1, 0.02), (2, 0.3), (3, 0.6), (4, 0.95)])
def test_random_grid_is_lossless(seed, density):
    grid = random_grid(seed, density)
    assert np.array_equal(run_listing(generate(grid)), grid)


def test_claims_are_disjoint():
    grid = random_grid(7, 0.5)
    pipeline = create_pipeline()
    ctx = pipeline.run(RecoveryContext.from_pixels(grid, pipeline.config))
    assert sum(claim.pixels for claim in ctx.claims) == count_on(grid)
    assert ctx.remaining == 0


def test_caller_grid_untouched(smiley):
    before = smiley.copy()
    generate(smiley)
    assert np.array_equal(smiley, before)


def test_diagonal_config_still_lossless():
    grid = grid_with(rz.line(3, 3, 60, 60), rz.line(100, 2, 70, 50))
    code = generate(grid, config=RecoveryConfig(detect_diagonal_runs=False))
    assert np.array_equal(run_listing(code), grid)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def test_recovery_report():
    report = generate_report(pixel_grid(1, 1))
    assert report.mode == RECOVERY
    assert report.completed_passes[-1] == "R4.01"
    assert len(report.completed_passes) == 10
    assert report.errors == {}
    assert report.elapsed_ms >= 0


def test_log_switches_to_replay():
    log = [CircleOp(x=64, y=32, radius=10), PixelOp(x=0, y=0)]
    report = generate_report(circle_grid(64, 32, 10), log)
    assert report.mode == REPLAY
    assert report.completed_passes == []
    assert report.lines == [
        CLEAR_LINE,
        "display.drawCircle(64, 32, 10, SSD1306_WHITE);",
        "display.drawPixel(0, 0, SSD1306_WHITE);",
        FLUSH_LINE,
    ]
