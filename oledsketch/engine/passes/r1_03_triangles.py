"""R1.03 — Triangles.

Vertex candidates are sparse on pixels (few on neighbours): corners of
outlines and tips of solid shapes. Every triple of candidates is tested; the
pair edges are cached since most triples share them. Combinations grow
cubically, so above ``max_triangle_candidates`` the pass does nothing and the
later passes explain the pixels instead.

Any triangle cut from a solid region passes the claim check, so triples are
only kept when the band outside each edge is off, and are claimed largest
first. A scanline fill never draws its bottom row; a filled triangle with a
flat base is tried with the base moved one row down before its own vertices.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from oledsketch.engine.calls import DRAW_TRIANGLE, FILL_TRIANGLE, DrawCall
from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.detectors import bbox_fill, edge_coverage, edge_halo, side_lengths, triangle_fill_ratio
from oledsketch.engine.registry import Stage, recovery_pass
from oledsketch.utils.geometry import Point, neighbour_count, round_half_up, triangle_area

logger = logging.getLogger(__name__)

Triangle = tuple[Point, Point, Point]

# x adjustments of the extended base vertices, tried in order
_BASE_NUDGES = [(0, 0), (-1, 0), (0, 1), (-1, 1), (1, 0), (0, -1)]


def vertex_candidates(ctx: RecoveryContext) -> list[Point]:
    """On pixels away from the border with at most a few on neighbours."""
    grid = ctx.grid
    sparse = grid & (neighbour_count(grid) <= ctx.config.triangle_max_neighbours)
    interior = np.zeros_like(sparse)
    interior[1:-1, 1:-1] = True
    return [(int(x), int(y)) for y, x in np.argwhere(sparse & interior)]


@recovery_pass(
    id="R1.03",
    stage=Stage.CURVES,
    dependencies=["R1.02"],
    description="Claim triangles (drawTriangle / fillTriangle)",
)
def triangles(ctx: RecoveryContext) -> None:
    cfg = ctx.config
    grid = ctx.grid
    points = vertex_candidates(ctx)
    if len(points) > cfg.max_triangle_candidates:
        logger.info(
            "R1.03: %d vertex candidates exceeds %d, skipping",
            len(points),
            cfg.max_triangle_candidates,
        )
        return

    edges: dict[tuple[int, int], bool] = {}

    def edge_ok(i: int, j: int) -> bool:
        if (i, j) not in edges:
            p, q = points[i], points[j]
            long_enough = math.dist(p, q) >= cfg.triangle_min_side
            edges[(i, j)] = long_enough and edge_coverage(grid, p, q) > cfg.triangle_edge_coverage
        return edges[(i, j)]

    found: list[tuple[float, Triangle]] = []
    n = len(points)
    for i in range(n):
        for j in range(i + 1, n):
            if not edge_ok(i, j):
                continue
            for k in range(j + 1, n):
                if not edge_ok(i, k) or not edge_ok(j, k):
                    continue
                tri = (points[i], points[j], points[k])
                if is_plausible_triangle(ctx, *tri):
                    found.append((triangle_area(*tri), tri))

    found.sort(key=lambda item: item[0], reverse=True)
    logger.debug("R1.03: %d candidates, %d plausible triangles", n, len(found))
    for _, tri in found:
        if all(ctx.on(*p) for p in tri):
            _claim_triangle(ctx, *tri)


def is_plausible_triangle(ctx: RecoveryContext, p1: Point, p2: Point, p3: Point) -> bool:
    """Shape checks that do not touch the claim state."""
    cfg = ctx.config
    grid = ctx.grid
    area = triangle_area(p1, p2, p3)
    if area < cfg.triangle_min_area:
        return False
    sides = side_lengths(p1, p2, p3)
    if min(sides) < cfg.triangle_min_side:
        return False
    if 2 * area / max(sides) < cfg.triangle_min_altitude:
        return False
    if bbox_fill(grid, [p1, p2, p3]) >= cfg.triangle_max_bbox_fill:
        return False
    for p, q, opposite in ((p1, p2, p3), (p2, p3, p1), (p3, p1, p2)):
        if edge_halo(grid, p, q, opposite, cfg.triangle_halo_offset) > cfg.triangle_max_halo:
            return False
    return True


def extended_bases(p1: Point, p2: Point, p3: Point) -> list[Triangle]:
    """Flat-based variants with the base one row below the lowest on row.

    The base vertices are pushed along their edges from the apex, then nudged
    by a pixel either way. Empty unless two vertices share the lowest row.
    """
    apex, left, right = sorted((p1, p2, p3), key=lambda p: (p[1], p[0]))
    if left[1] != right[1] or left[1] == apex[1]:
        return []
    rows = left[1] - apex[1]
    y = left[1] + 1

    def extend(p: Point) -> int:
        return round_half_up(apex[0] + (p[0] - apex[0]) * (rows + 1) / rows)

    lx, rx = extend(left), extend(right)
    return [(apex, (lx + dl, y), (rx + dr, y)) for dl, dr in _BASE_NUDGES]


def _claim_triangle(ctx: RecoveryContext, p1: Point, p2: Point, p3: Point) -> bool:
    cfg = ctx.config
    if triangle_fill_ratio(ctx.grid, p1, p2, p3) > cfg.triangle_fill_ratio:
        for a, b, c in [*extended_bases(p1, p2, p3), (p1, p2, p3)]:
            if ctx.try_claim(DrawCall(FILL_TRIANGLE, (*a, *b, *c))):
                return True
    return ctx.try_claim(DrawCall(DRAW_TRIANGLE, (*p1, *p2, *p3)))
