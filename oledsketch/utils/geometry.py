"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

Point = tuple[int, int]

# Barycentric area sums are compared against the full area with this slack
# to absorb float error on integer vertices.
_AREA_EPS = 0.1


def round_half_up(value: float) -> int:
    """Round .5 away towards +inf, like the drawing firmware does (not banker's)."""
    return math.floor(value + 0.5)


def distance(p: Point, q: Point) -> float:
    return math.hypot(q[0] - p[0], q[1] - p[1])


def triangle_area(p1: Point, p2: Point, p3: Point) -> float:
    """Unsigned area via the shoelace formula."""
    return abs(
        p1[0] * (p2[1] - p3[1]) + p2[0] * (p3[1] - p1[1]) + p3[0] * (p1[1] - p2[1])
    ) / 2


def point_in_triangle(p: Point, p1: Point, p2: Point, p3: Point) -> bool:
    """Barycentric-area test: the three sub-triangles sum to the whole."""
    area = triangle_area(p1, p2, p3)
    a1 = triangle_area(p, p2, p3)
    a2 = triangle_area(p1, p, p3)
    a3 = triangle_area(p1, p2, p)
    return abs(area - (a1 + a2 + a3)) < _AREA_EPS


def circle_samples(radius: int, count: int, inward: bool = False) -> list[Point]:
    """Offsets of ``count`` evenly spaced points on a circle, rounded to pixels.

    With ``inward`` the coordinates are truncated towards the centre instead,
    so every sample lies within ``radius`` of it. Duplicates are kept:
    detectors weigh each sample equally.
    """
    snap = math.trunc if inward else round_half_up
    samples: list[Point] = []
    for i in range(count):
        angle = (i / count) * 2 * math.pi
        samples.append((snap(radius * math.cos(angle)), snap(radius * math.sin(angle))))
    return samples


def shift_sum(grid: NDArray[np.bool_], offsets: list[Point]) -> NDArray[np.int32]:
    """For every pixel p, count the offsets o with ``grid[p + o]`` on.

    Off-grid positions read as off. Evaluates a sampled pattern at every
    candidate centre at once.
    """
    h, w = grid.shape
    if not offsets:
        return np.zeros((h, w), dtype=np.int32)
    pad = max(max(abs(dx), abs(dy)) for dx, dy in offsets)
    padded = np.pad(grid.astype(np.int32), pad)
    acc = np.zeros((h, w), dtype=np.int32)
    for dx, dy in offsets:
        acc += padded[pad + dy : pad + dy + h, pad + dx : pad + dx + w]
    return acc


def in_bounds_count(shape: tuple[int, int], offsets: list[Point]) -> NDArray[np.int32]:
    """How many of ``offsets`` land on the grid, per centre."""
    return shift_sum(np.ones(shape, dtype=np.bool_), offsets)


def neighbour_count(grid: NDArray[np.bool_]) -> NDArray[np.int32]:
    """Number of on pixels in each pixel's 8-neighbourhood."""
    offsets = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if dx or dy]
    return shift_sum(grid, offsets)
