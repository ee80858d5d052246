"""Tests for page-ordered frame bitmaps."""

from __future__ import annotations

import numpy as np
import pytest

from oledsketch.engine.bitmap import FRAME_BYTES, format_frames, pack_pages, unpack_pages
from oledsketch.errors import GridShapeError
from oledsketch.utils.grid import new_grid
from tests.conftest import pixel_grid, random_grid


def test_blank_frame():
    data = pack_pages(new_grid())
    assert len(data) == FRAME_BYTES == 1024
    assert data == bytes(1024)


@pytest.mark.parametrize(
    ("x", "y", "index", "value"),
    [
        (0, 0, 0, 0x01),
        (0, 7, 0, 0x80),
        (5, 8, 133, 0x01),
        (127, 63, 1023, 0x80),
    ],
)
def test_pixel_byte_position(x, y, index, value):
    data = pack_pages(pixel_grid(x, y))
    assert data[index] == value
    assert sum(1 for b in data if b) == 1


def test_unpack_inverts_pack():
    grid = random_grid(11, 0.4)
    assert np.array_equal(unpack_pages(pack_pages(grid)), grid)


def test_unpack_rejects_wrong_length():
    with pytest.raises(GridShapeError):
        unpack_pages(bytes(10))


def test_format_single_frame():
    text = format_frames([pixel_grid(0, 0)])
    lines = text.splitlines()
    assert lines[0].startswith("// 1 frame(s)")
    assert lines[1] == "static const unsigned char PROGMEM frame_data[1][1024] = {"
    assert lines[2] == "  { // Frame 1"
    data_lines = [line for line in lines if line.startswith("    0x")]
    assert len(data_lines) == 64
    assert data_lines[0].startswith("    0x01, 0x00")
    assert lines[-2] == "  }"
    assert lines[-1] == "};"


def test_format_frames_named():
    text = format_frames([new_grid(), new_grid()], name="intro")
    assert "PROGMEM intro[2][1024]" in text
    assert "  { // Frame 2" in text
    assert text.count("  },") == 1
