"""Primitive calls — value type, text formatting, parsing and execution.

A :class:`DrawCall` is one invocation of the display's graphics API. The same
``points_for`` rasterization is used to execute generated listings and to
verify shape-recovery claims, so whatever recovery claims is exactly what the
emitted call draws.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from oledsketch.errors import CallSyntaxError
from oledsketch.utils import rasterizer as rz
from oledsketch.utils.geometry import Point
from oledsketch.utils.grid import PixelGrid, new_grid

CLEAR_DISPLAY = "clearDisplay"
FLUSH_DISPLAY = "display"
DRAW_PIXEL = "drawPixel"
DRAW_LINE = "drawLine"
DRAW_RECT = "drawRect"
FILL_RECT = "fillRect"
DRAW_CIRCLE = "drawCircle"
FILL_CIRCLE = "fillCircle"
DRAW_ROUND_RECT = "drawRoundRect"
FILL_ROUND_RECT = "fillRoundRect"
DRAW_TRIANGLE = "drawTriangle"
FILL_TRIANGLE = "fillTriangle"
FILL_SCREEN = "fillScreen"
DRAW_FAST_HLINE = "drawFastHLine"
DRAW_FAST_VLINE = "drawFastVLine"

# Integer argument count per call; ``None`` marks calls without a colour.
ARITY: dict[str, int | None] = {
    CLEAR_DISPLAY: None,
    FLUSH_DISPLAY: None,
    DRAW_PIXEL: 2,
    DRAW_LINE: 4,
    DRAW_RECT: 4,
    FILL_RECT: 4,
    DRAW_CIRCLE: 3,
    FILL_CIRCLE: 3,
    DRAW_ROUND_RECT: 5,
    FILL_ROUND_RECT: 5,
    DRAW_TRIANGLE: 6,
    FILL_TRIANGLE: 6,
    FILL_SCREEN: 0,
    DRAW_FAST_HLINE: 3,
    DRAW_FAST_VLINE: 3,
}

_TRIANGLES = {DRAW_TRIANGLE, FILL_TRIANGLE}

_CALL_RE = re.compile(r"^\s*(\w+)\.(\w+)\((.*)\);\s*$")


@dataclass(frozen=True)
class DrawCall:
    name: str
    args: tuple[int, ...] = ()
    on: bool = True


@dataclass(frozen=True)
class CallStyle:
    """How calls are spelled: receiver object and colour symbols."""

    receiver: str = "display"
    on_color: str = "SSD1306_WHITE"
    off_color: str = "SSD1306_BLACK"

    def format(self, call: DrawCall) -> str:
        if ARITY.get(call.name, 0) is None:
            return f"{self.receiver}.{call.name}();"
        color = self.on_color if call.on else self.off_color
        if call.name in _TRIANGLES:
            coords = ",".join(str(a) for a in call.args)
        else:
            coords = ", ".join(str(a) for a in call.args)
        params = f"{coords}, {color}" if coords else color
        return f"{self.receiver}.{call.name}({params});"

    def format_all(self, calls: Iterable[DrawCall]) -> list[str]:
        return [self.format(c) for c in calls]


def parse_call(line: str, style: CallStyle | None = None) -> DrawCall:
    """Parse one generated line back into a :class:`DrawCall`.

    Raises:
        CallSyntaxError: Unknown call, wrong receiver, argument count or colour.
    """
    style = style or CallStyle()
    match = _CALL_RE.match(line)
    if match is None:
        raise CallSyntaxError(f"Not a call: {line!r}")
    receiver, name, raw = match.groups()
    if receiver != style.receiver:
        raise CallSyntaxError(f"Unexpected receiver {receiver!r} in {line!r}")
    if name not in ARITY:
        raise CallSyntaxError(f"Unknown call {name!r}")

    arity = ARITY[name]
    parts = [p.strip() for p in raw.split(",")] if raw.strip() else []
    if arity is None:
        if parts:
            raise CallSyntaxError(f"{name} takes no arguments: {line!r}")
        return DrawCall(name)

    if len(parts) != arity + 1:
        raise CallSyntaxError(f"{name} expects {arity} coordinates and a colour: {line!r}")
    *numbers, color = parts
    if color == style.on_color:
        on = True
    elif color == style.off_color:
        on = False
    else:
        raise CallSyntaxError(f"Unknown colour {color!r} in {line!r}")
    try:
        args = tuple(int(n) for n in numbers)
    except ValueError as e:
        raise CallSyntaxError(f"Non-integer argument in {line!r}") from e
    return DrawCall(name, args, on)


def points_for(call: DrawCall, width: int, height: int) -> list[Point]:
    """Pixels a call writes on a ``width`` × ``height`` display."""
    a = call.args
    name = call.name
    if name == DRAW_PIXEL:
        return rz.line(a[0], a[1], a[0], a[1], width, height)
    if name == DRAW_LINE:
        return rz.line(*a, width, height)
    if name == DRAW_RECT:
        return rz.rectangle_box(*a, width, height)
    if name == FILL_RECT:
        return rz.rectangle_filled(*a, width, height)
    if name == DRAW_CIRCLE:
        return rz.circle_outline(*a, width, height)
    if name == FILL_CIRCLE:
        return rz.circle_filled(*a, width, height)
    if name == DRAW_ROUND_RECT:
        return rz.rounded_rectangle_outline(*a, width=width, height=height)
    if name == FILL_ROUND_RECT:
        return rz.rounded_rectangle_filled(*a, width=width, height=height)
    if name == DRAW_TRIANGLE:
        return rz.triangle_outline(a[0:2], a[2:4], a[4:6], width, height)
    if name == FILL_TRIANGLE:
        return rz.triangle_filled(a[0:2], a[2:4], a[4:6], width, height)
    if name == FILL_SCREEN:
        return rz.rectangle_filled(0, 0, width, height, width, height)
    if name == DRAW_FAST_HLINE:
        x, y, length = a
        return rz.rectangle_filled(x, y, length, 1, width, height)
    if name == DRAW_FAST_VLINE:
        x, y, length = a
        return rz.rectangle_filled(x, y, 1, length, width, height)
    return []


def execute_call(grid: PixelGrid, call: DrawCall) -> PixelGrid:
    """Run one call against ``grid`` in place."""
    if call.name == CLEAR_DISPLAY:
        grid[:, :] = False
        return grid
    h, w = grid.shape
    return rz.plot(grid, points_for(call, w, h), call.on)


def execute_calls(
    lines: Iterable[str] | str,
    style: CallStyle | None = None,
    grid: PixelGrid | None = None,
) -> PixelGrid:
    """Interpret a generated listing on a fresh (or given) grid.

    Accepts the listing as one newline-joined string or as separate lines.
    Blank lines are skipped.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    out = new_grid() if grid is None else grid
    for line in lines:
        if not line.strip():
            continue
        execute_call(out, parse_call(line, style))
    return out
