"""Compile 128×64 monochrome bitmaps into display drawing calls."""

__version__ = "0.1.0"
