"""Page bitmaps — the display controller's native frame buffer layout.

The panel is split into 8-pixel-tall pages. Each byte is one column of one
page with bit 0 the top pixel, and bytes run column by column, page by page,
so byte ``page * width + x`` holds pixels ``y = page*8 .. page*8 + 7``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from oledsketch.errors import GridShapeError
from oledsketch.utils.grid import HEIGHT, WIDTH, PixelGrid

logger = logging.getLogger(__name__)

PAGE_HEIGHT = 8
FRAME_BYTES = WIDTH * HEIGHT // PAGE_HEIGHT
BYTES_PER_LINE = 16


def pack_pages(grid: PixelGrid) -> bytes:
    """Pack a grid into page-ordered bytes.

    A height that is not a multiple of 8 is padded with off pixels.
    """
    pixels = np.asarray(grid, dtype=np.bool_)
    h, w = pixels.shape
    pages = -(-h // PAGE_HEIGHT)
    padded = np.zeros((pages * PAGE_HEIGHT, w), dtype=np.bool_)
    padded[:h] = pixels
    # (page, bit, x) -> (page, x, bit), then 8 bits per byte, LSB first
    columns = padded.reshape(pages, PAGE_HEIGHT, w).transpose(0, 2, 1)
    return np.packbits(columns, axis=-1, bitorder="little").tobytes()


def unpack_pages(data: bytes, width: int = WIDTH, height: int = HEIGHT) -> PixelGrid:
    """Inverse of :func:`pack_pages`.

    Raises:
        GridShapeError: ``data`` is not one frame for ``width`` × ``height``.
    """
    pages = -(-height // PAGE_HEIGHT)
    if len(data) != pages * width:
        raise GridShapeError((len(data),), (height, width))
    raw = np.frombuffer(bytes(data), dtype=np.uint8).reshape(pages, width, 1)
    bits = np.unpackbits(raw, axis=-1, bitorder="little")
    grid = bits.transpose(0, 2, 1).reshape(pages * PAGE_HEIGHT, width)
    return grid[:height].astype(np.bool_)


def _format_frame(data: bytes) -> list[str]:
    lines = []
    for i in range(0, len(data), BYTES_PER_LINE):
        chunk = data[i : i + BYTES_PER_LINE]
        lines.append("    " + ", ".join(f"0x{b:02x}" for b in chunk))
    return lines


def format_frames(frames: Sequence[PixelGrid], name: str = "frame_data") -> str:
    """C source declaring one ``PROGMEM`` array row per frame."""
    packed = [pack_pages(f) for f in frames]
    size = len(packed[0]) if packed else FRAME_BYTES
    out = [
        f"// {len(packed)} frame(s), {WIDTH}x{HEIGHT} pixels, {size} bytes each",
        f"static const unsigned char PROGMEM {name}[{len(packed)}][{size}] = {{",
    ]
    for index, data in enumerate(packed):
        out.append(f"  {{ // Frame {index + 1}")
        out.append(",\n".join(_format_frame(data)))
        out.append("  }" + ("," if index < len(packed) - 1 else ""))
    out.append("};")
    logger.debug("Formatted %d frame(s) as %s", len(packed), name)
    return "\n".join(out)
