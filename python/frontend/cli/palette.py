"""Colours for the strip picture drawn in the terminal.

The "picture" is a horizontal rainbow: every character column gets a hue from
its position in the solved image, so a solved board shows one smooth gradient
and misplaced strips show up as jumps in colour.
"""

from __future__ import annotations

import colorsys

RGB = tuple[int, int, int]


def column_colour(tile: int, column: int, size: int, width: int) -> RGB:
    """Colour of *column* (0-based, inside the strip) of *tile*."""
    pos = (tile * width + column) / max(1, size * width - 1)
    r, g, b = colorsys.hsv_to_rgb(pos * 0.83, 0.55, 0.95)
    return int(r * 255), int(g * 255), int(b * 255)


def strip_colours(tile: int, size: int, width: int) -> list[RGB]:
    return [column_colour(tile, c, size, width) for c in range(width)]


def label_for(tile: int) -> str:
    """Number shown on a tile (tiles are numbered from 1 for players)."""
    return str(tile + 1)
