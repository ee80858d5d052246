"""Boundary errors. The drawing core itself never raises these."""

from __future__ import annotations


class GridShapeError(ValueError):
    """A pixel grid does not have the display's dimensions."""

    def __init__(self, shape: tuple[int, ...], expected: tuple[int, int]) -> None:
        super().__init__(f"Expected a {expected[0]}x{expected[1]} grid, got {shape}")
        self.shape = shape
        self.expected = expected


class CallSyntaxError(ValueError):
    """A generated call line could not be parsed."""
