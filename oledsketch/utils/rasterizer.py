"""Rasterization primitives shared by drawing, replay and shape recovery.

Every primitive returns the in-bounds ``(x, y)`` points it covers. Off-grid
points are dropped and non-positive sizes give no points, so all of these are
total functions. ``plot`` writes a point list into a grid.
"""

from __future__ import annotations

import math
from collections import deque

import numpy as np

from oledsketch.utils.geometry import Point, round_half_up
from oledsketch.utils.grid import HEIGHT, WIDTH, PixelGrid

# Rounded-rectangle corners never exceed 5px, and are a quarter of the
# shorter side below that.
MAX_CORNER_RADIUS = 5
_CORNER_DIVISOR = 4


def _clip(points: list[Point], width: int, height: int) -> list[Point]:
    return [(x, y) for x, y in points if 0 <= x < width and 0 <= y < height]


def _unique(points: list[Point]) -> list[Point]:
    return list(dict.fromkeys(points))


def plot(grid: PixelGrid, points: list[Point], value: bool = True) -> PixelGrid:
    """Write ``value`` at each point, in place. Returns ``grid`` for chaining."""
    h, w = grid.shape
    for x, y in points:
        if 0 <= x < w and 0 <= y < h:
            grid[y, x] = value
    return grid


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------


def _bresenham(x0: int, y0: int, x1: int, y1: int) -> list[Point]:
    """Unclipped Bresenham path, start to end inclusive."""
    points: list[Point] = []
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            if x == x1:
                break
            err += dy
            x += sx
        if e2 <= dx:
            if y == y1:
                break
            err += dx
            y += sy
    return points


def line(
    x0: int, y0: int, x1: int, y1: int, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Bresenham line, 8-connected, both endpoints included."""
    return _clip(_bresenham(x0, y0, x1, y1), width, height)


# ---------------------------------------------------------------------------
# Rectangles
# ---------------------------------------------------------------------------


def rectangle_outline(
    x0: int, y0: int, x1: int, y1: int, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Border of the box spanned by two corner points (any order)."""
    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    points = [
        (x, y)
        for y in range(top, bottom + 1)
        for x in range(left, right + 1)
        if y in (top, bottom) or x in (left, right)
    ]
    return _clip(points, width, height)


def rectangle_box(
    left: int, top: int, w: int, h: int, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Border of the half-open box ``[left, left+w) × [top, top+h)``."""
    if w <= 0 or h <= 0:
        return []
    return rectangle_outline(left, top, left + w - 1, top + h - 1, width, height)


def rectangle_filled(
    left: int, top: int, w: int, h: int, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Every pixel of the half-open box. Empty when ``w`` or ``h`` ≤ 0."""
    if w <= 0 or h <= 0:
        return []
    points = [(x, y) for y in range(top, top + h) for x in range(left, left + w)]
    return _clip(points, width, height)


# ---------------------------------------------------------------------------
# Circles
# ---------------------------------------------------------------------------


def circle_outline(
    cx: int, cy: int, radius: int, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Midpoint circle with 8-way symmetric emission.

    Same decision variable as the display library's ``drawCircle``, so the
    pixels match what firmware draws for the emitted call.
    """
    if radius < 0:
        return []
    f = 1 - radius
    ddf_x = 1
    ddf_y = -2 * radius
    x, y = 0, radius
    points: list[Point] = [
        (cx, cy + radius),
        (cx, cy - radius),
        (cx + radius, cy),
        (cx - radius, cy),
    ]
    while x < y:
        if f >= 0:
            y -= 1
            ddf_y += 2
            f += ddf_y
        x += 1
        ddf_x += 2
        f += ddf_x
        points.extend(
            [
                (cx + x, cy + y),
                (cx - x, cy + y),
                (cx + x, cy - y),
                (cx - x, cy - y),
                (cx + y, cy + x),
                (cx - y, cy + x),
                (cx + y, cy - x),
                (cx - y, cy - x),
            ]
        )
    return _clip(_unique(points), width, height)


def circle_filled(
    cx: int, cy: int, radius: int, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Every pixel within Euclidean distance ``radius`` of the centre."""
    if radius < 0:
        return []
    r2 = radius * radius
    points = [
        (x, y)
        for y in range(cy - radius, cy + radius + 1)
        for x in range(cx - radius, cx + radius + 1)
        if (x - cx) ** 2 + (y - cy) ** 2 <= r2
    ]
    return _clip(points, width, height)


# ---------------------------------------------------------------------------
# Rounded rectangles
# ---------------------------------------------------------------------------


def corner_radius(w: int, h: int) -> int:
    """Corner radius the editor picks for a ``w`` × ``h`` rounded rectangle."""
    return min(MAX_CORNER_RADIUS, math.floor(min(w, h) / _CORNER_DIVISOR))


def _corner_arc(cx: int, cy: int, radius: int, start_deg: int, end_deg: int) -> list[Point]:
    start = start_deg * math.pi / 180
    end = end_deg * math.pi / 180
    step = math.pi / (6 * radius)
    points: list[Point] = []
    theta = start
    while theta <= end:
        points.append(
            (round_half_up(cx + radius * math.cos(theta)), round_half_up(cy + radius * math.sin(theta)))
        )
        theta += step
    return points


def rounded_rectangle_outline(
    left: int,
    top: int,
    w: int,
    h: int,
    radius: int | None = None,
    width: int = WIDTH,
    height: int = HEIGHT,
) -> list[Point]:
    """Straight edges between the corners plus four quarter arcs.

    ``radius`` defaults to :func:`corner_radius`; ≤ 1 draws a plain box.
    """
    if w <= 0 or h <= 0:
        return []
    r = corner_radius(w, h) if radius is None else radius
    if r <= 1:
        return rectangle_box(left, top, w, h, width, height)

    right = left + w - 1
    bottom = top + h - 1
    points: list[Point] = []
    for x in range(left + r, right - r + 1):
        points.append((x, top))
        points.append((x, bottom))
    for y in range(top + r, bottom - r + 1):
        points.append((left, y))
        points.append((right, y))
    points += _corner_arc(left + r, top + r, r, 180, 270)
    points += _corner_arc(right - r, top + r, r, 270, 360)
    points += _corner_arc(right - r, bottom - r, r, 0, 90)
    points += _corner_arc(left + r, bottom - r, r, 90, 180)
    return _clip(_unique(points), width, height)


def rounded_rectangle_corners(
    left: int,
    top: int,
    w: int,
    h: int,
    radius: int | None = None,
    width: int = WIDTH,
    height: int = HEIGHT,
) -> list[Point]:
    """Pixels of each r×r corner square lying outside that corner's arc."""
    if w <= 0 or h <= 0:
        return []
    r = corner_radius(w, h) if radius is None else radius
    if r <= 1:
        return []

    right = left + w - 1
    bottom = top + h - 1
    r2 = r * r
    # (x-range, y-range, arc centre) of each corner square
    corners = [
        (range(left, left + r), range(top, top + r), (left + r, top + r)),
        (range(right - r + 1, right + 1), range(top, top + r), (right - r, top + r)),
        (range(right - r + 1, right + 1), range(bottom - r + 1, bottom + 1), (right - r, bottom - r)),
        (range(left, left + r), range(bottom - r + 1, bottom + 1), (left + r, bottom - r)),
    ]
    points: list[Point] = []
    for xs, ys, (ax, ay) in corners:
        for y in ys:
            for x in xs:
                if (x - ax) ** 2 + (y - ay) ** 2 > r2:
                    points.append((x, y))
    return _clip(points, width, height)


def rounded_rectangle_filled(
    left: int,
    top: int,
    w: int,
    h: int,
    radius: int | None = None,
    width: int = WIDTH,
    height: int = HEIGHT,
) -> list[Point]:
    """Full box without its corner pixels."""
    cleared = set(rounded_rectangle_corners(left, top, w, h, radius, width, height))
    return [p for p in rectangle_filled(left, top, w, h, width, height) if p not in cleared]


# ---------------------------------------------------------------------------
# Triangles
# ---------------------------------------------------------------------------


def triangle_vertices(
    top_x: int, top_y: int, w: int, h: int, width: int = WIDTH, height: int = HEIGHT
) -> tuple[Point, Point, Point]:
    """Apex plus the two base corners of the editor's isosceles triangle."""
    apex = (top_x, top_y)
    base_y = min(height - 1, top_y + h)
    bottom_left = (max(0, math.floor(top_x - w / 2)), base_y)
    bottom_right = (min(width - 1, math.floor(top_x + w / 2)), base_y)
    return apex, bottom_left, bottom_right


def triangle_outline(
    p1: Point, p2: Point, p3: Point, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Three Bresenham edges p1→p2→p3→p1, each pixel once."""
    points = _bresenham(*p1, *p2) + _bresenham(*p2, *p3) + _bresenham(*p3, *p1)
    return _clip(_unique(points), width, height)


def triangle_filled(
    p1: Point, p2: Point, p3: Point, width: int = WIDTH, height: int = HEIGHT
) -> list[Point]:
    """Scanline fill between sorted edge intersections.

    An edge contributes on rows it straddles half-open (``a.y ≤ y < b.y``),
    so a flat bottom row gets no span.
    """
    min_y = max(0, min(p1[1], p2[1], p3[1]))
    max_y = min(height - 1, max(p1[1], p2[1], p3[1]))
    edges = [(p1, p2), (p2, p3), (p3, p1)]
    points: list[Point] = []
    for y in range(min_y, max_y + 1):
        xs: list[float] = []
        for (ax, ay), (bx, by) in edges:
            if (ay <= y < by) or (by <= y < ay):
                xs.append(ax + (y - ay) * (bx - ax) / (by - ay))
        xs.sort()
        for i in range(0, len(xs) - 1, 2):
            start = max(0, round_half_up(xs[i]))
            end = min(width - 1, round_half_up(xs[i + 1]))
            points.extend((x, y) for x in range(start, end + 1))
    return _unique(points)


# ---------------------------------------------------------------------------
# Region fill
# ---------------------------------------------------------------------------


def flood_fill(grid: PixelGrid, x: int, y: int, value: bool) -> list[Point]:
    """Pixels of the 4-connected region around (x, y) that would change.

    Empty when the seed is off-grid or already holds ``value``.
    """
    h, w = grid.shape
    if not (0 <= x < w and 0 <= y < h) or bool(grid[y, x]) == value:
        return []
    target = bool(grid[y, x])
    seen = np.zeros_like(grid, dtype=np.bool_)
    seen[y, x] = True
    queue: deque[Point] = deque([(x, y)])
    points: list[Point] = []
    while queue:
        cx, cy = queue.popleft()
        points.append((cx, cy))
        for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
            if 0 <= nx < w and 0 <= ny < h and not seen[ny, nx] and bool(grid[ny, nx]) == target:
                seen[ny, nx] = True
                queue.append((nx, ny))
    return points
