"""Shape detectors shared by the recovery passes.

Point-wise detectors answer "is there a shape here?" for one candidate. The
``*_map`` variants evaluate the same test at every centre of the grid at once
with :func:`shift_sum`, and the passes use them to prune candidates before the
point-wise check. All of them read the grid, none of them write it.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from oledsketch.engine.config import RecoveryConfig
from oledsketch.utils import rasterizer as rz
from oledsketch.utils.geometry import Point, circle_samples, in_bounds_count, round_half_up, shift_sum
from oledsketch.utils.grid import PixelGrid

BoolMap = NDArray[np.bool_]


def _count_on(grid: PixelGrid, cx: int, cy: int, offsets: list[Point]) -> tuple[int, int]:
    """(on, in-bounds) sample counts around (cx, cy)."""
    h, w = grid.shape
    on = total = 0
    for dx, dy in offsets:
        x, y = cx + dx, cy + dy
        if 0 <= x < w and 0 <= y < h:
            total += 1
            if grid[y, x]:
                on += 1
    return on, total


# ---------------------------------------------------------------------------
# Circles
# ---------------------------------------------------------------------------


def circle_sample_count(radius: int, config: RecoveryConfig) -> int:
    return max(config.circle_min_samples, radius * config.circle_samples_per_radius)


def ring_sample_count(radius: int, config: RecoveryConfig) -> int:
    return max(config.ring_min_samples, radius * config.ring_samples_per_radius)


def ring_radii(radius: int, config: RecoveryConfig) -> range:
    """Inner rings sampled to tell a disc from an outline."""
    step = max(1, radius // config.ring_spacing_divisor)
    return range(1, radius, step)


def _perimeter_ok(on: int, total: int, config: RecoveryConfig) -> bool:
    return total > 0 and on / total > config.circle_on_ratio and on >= config.circle_min_on


def is_circle(grid: PixelGrid, cx: int, cy: int, radius: int, config: RecoveryConfig) -> bool:
    """Most of the sampled perimeter at ``radius`` is on.

    Samples that fall off the grid are left out of the ratio.
    """
    samples = circle_samples(radius, circle_sample_count(radius, config))
    on, total = _count_on(grid, cx, cy, samples)
    return _perimeter_ok(on, total, config)


def rings_filled(grid: PixelGrid, cx: int, cy: int, radius: int, config: RecoveryConfig) -> bool:
    """Centre and every sampled inner ring are fully on."""
    h, w = grid.shape
    if not (0 <= cx < w and 0 <= cy < h and grid[cy, cx]):
        return False
    for r in ring_radii(radius, config):
        on, total = _count_on(grid, cx, cy, circle_samples(r, ring_sample_count(r, config)))
        if on != total:
            return False
    return True


def is_filled_circle(grid: PixelGrid, cx: int, cy: int, radius: int, config: RecoveryConfig) -> bool:
    """A solid disc of ``radius`` centred at (cx, cy).

    The perimeter is sampled just inside the boundary, since a disc's own edge
    pixels sit within ``radius`` of the centre.
    """
    samples = circle_samples(radius, circle_sample_count(radius, config), inward=True)
    on, total = _count_on(grid, cx, cy, samples)
    return _perimeter_ok(on, total, config) and rings_filled(grid, cx, cy, radius, config)


def halo_offsets(radius: int) -> list[Point]:
    """The ring one pixel outside a disc of ``radius``."""
    size = 2 * radius + 5
    outer = rz.circle_outline(radius + 1, radius + 1, radius + 1, size, size)
    r2 = radius * radius
    offsets = [(x - radius - 1, y - radius - 1) for x, y in outer]
    return [(dx, dy) for dx, dy in offsets if dx * dx + dy * dy > r2]


def circle_map(grid: PixelGrid, radius: int, config: RecoveryConfig, inward: bool = False) -> BoolMap:
    """:func:`is_circle` (or the disc perimeter test) at every centre."""
    samples = circle_samples(radius, circle_sample_count(radius, config), inward=inward)
    on = shift_sum(grid, samples)
    total = in_bounds_count(grid.shape, samples)
    ratio = on / np.maximum(total, 1)
    return (total > 0) & (ratio > config.circle_on_ratio) & (on >= config.circle_min_on)


class RingMaps:
    """Lazily computed "ring fully on" maps, one per inner radius."""

    def __init__(self, grid: PixelGrid, config: RecoveryConfig) -> None:
        self.grid = grid
        self.config = config
        self._rings: dict[int, BoolMap] = {}

    def ring(self, radius: int) -> BoolMap:
        if radius not in self._rings:
            samples = circle_samples(radius, ring_sample_count(radius, self.config))
            on = shift_sum(self.grid, samples)
            self._rings[radius] = on == in_bounds_count(self.grid.shape, samples)
        return self._rings[radius]

    def filled(self, radius: int) -> BoolMap:
        """:func:`rings_filled` at every centre."""
        out = self.grid.copy()
        for r in ring_radii(radius, self.config):
            out &= self.ring(r)
        return out


def halo_map(grid: PixelGrid, radius: int, config: RecoveryConfig) -> BoolMap:
    """Centres whose disc of ``radius`` stands apart from its surroundings."""
    offsets = halo_offsets(radius)
    on = shift_sum(grid, offsets)
    return on <= config.filled_circle_max_halo * len(offsets)


def centre_window(shape: tuple[int, int], margin: int) -> BoolMap:
    """Mask of centres at least ``margin`` pixels from every edge."""
    h, w = shape
    mask = np.zeros(shape, dtype=np.bool_)
    mask[margin : max(margin, h - margin), margin : max(margin, w - margin)] = True
    return mask


# ---------------------------------------------------------------------------
# Lines and triangles
# ---------------------------------------------------------------------------


def edge_coverage(grid: PixelGrid, p: Point, q: Point) -> float:
    """Fraction of the Bresenham path p→q that is on."""
    h, w = grid.shape
    path = rz.line(p[0], p[1], q[0], q[1], w, h)
    if not path:
        return 0.0
    on = sum(1 for x, y in path if grid[y, x])
    return on / len(path)


def edge_halo(grid: PixelGrid, p: Point, q: Point, opposite: Point, offset: float) -> float:
    """On fraction of a band ``offset`` pixels outside edge p→q.

    Outside is the side away from ``opposite``, the third vertex. Samples skip
    the ends of the edge, where the band meets the neighbouring edges.
    """
    length = math.dist(p, q)
    if length == 0:
        return 1.0
    nx = (q[1] - p[1]) / length
    ny = -(q[0] - p[0]) / length
    if (opposite[0] - p[0]) * nx + (opposite[1] - p[1]) * ny > 0:
        nx, ny = -nx, -ny

    h, w = grid.shape
    count = max(4, round(length))
    on = 0
    for i in range(count):
        t = 0.15 + 0.7 * (i + 0.5) / count
        x = round_half_up(p[0] + (q[0] - p[0]) * t + nx * offset)
        y = round_half_up(p[1] + (q[1] - p[1]) * t + ny * offset)
        if 0 <= x < w and 0 <= y < h and grid[y, x]:
            on += 1
    return on / count


def triangle_fill_ratio(grid: PixelGrid, p1: Point, p2: Point, p3: Point) -> float:
    """Fraction of the bounding-box pixels inside the triangle that are on.

    Same barycentric area-sum test as :func:`point_in_triangle`, over the whole
    box at once.
    """
    h, w = grid.shape
    left = max(0, min(p1[0], p2[0], p3[0]))
    right = min(w - 1, max(p1[0], p2[0], p3[0]))
    top = max(0, min(p1[1], p2[1], p3[1]))
    bottom = min(h - 1, max(p1[1], p2[1], p3[1]))
    if left > right or top > bottom:
        return 0.0
    ys, xs = np.mgrid[top : bottom + 1, left : right + 1]

    def area(a, b, c):
        return np.abs(
            a[0] * (b[1] - c[1]) + b[0] * (c[1] - a[1]) + c[0] * (a[1] - b[1])
        ) / 2

    p = (xs, ys)
    whole = area(p1, p2, p3)
    inside = np.abs(whole - (area(p, p2, p3) + area(p1, p, p3) + area(p1, p2, p))) < 0.1
    total = int(np.count_nonzero(inside))
    if total == 0:
        return 0.0
    on = int(np.count_nonzero(grid[top : bottom + 1, left : right + 1] & inside))
    return on / total


def bbox_fill(grid: PixelGrid, points: list[Point]) -> float:
    """On fraction of the bounding box of ``points``."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    box = grid[min(ys) : max(ys) + 1, min(xs) : max(xs) + 1]
    return float(np.count_nonzero(box)) / box.size if box.size else 0.0


def side_lengths(p1: Point, p2: Point, p3: Point) -> tuple[float, float, float]:
    return (
        math.dist(p1, p2),
        math.dist(p2, p3),
        math.dist(p3, p1),
    )


# ---------------------------------------------------------------------------
# Boxes and runs
# ---------------------------------------------------------------------------


def run_right(grid: PixelGrid, x: int, y: int) -> int:
    """Length of the on run starting at (x, y) and going right."""
    row = grid[y, x:]
    off = np.flatnonzero(~row)
    return int(off[0]) if off.size else int(row.size)


def run_down(grid: PixelGrid, x: int, y: int) -> int:
    """Length of the on run starting at (x, y) and going down."""
    col = grid[y:, x]
    off = np.flatnonzero(~col)
    return int(off[0]) if off.size else int(col.size)


def box_on(grid: PixelGrid, left: int, top: int, w: int, h: int) -> bool:
    """Every pixel of the box is on. Boxes leaving the grid are not."""
    gh, gw = grid.shape
    if w <= 0 or h <= 0 or left < 0 or top < 0 or left + w > gw or top + h > gh:
        return False
    return bool(grid[top : top + h, left : left + w].all())


def border_on(grid: PixelGrid, left: int, top: int, w: int, h: int) -> bool:
    """All four sides of the box are on."""
    gh, gw = grid.shape
    if w <= 0 or h <= 0 or left < 0 or top < 0 or left + w > gw or top + h > gh:
        return False
    right = left + w - 1
    bottom = top + h - 1
    return bool(
        grid[top, left : right + 1].all()
        and grid[bottom, left : right + 1].all()
        and grid[top : bottom + 1, left].all()
        and grid[top : bottom + 1, right].all()
    )
