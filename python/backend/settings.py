"""Game settings shared by the CLI and the terminal frontends."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import StrEnum

MIN_TILES = 2
MAX_TILES = 12


class DragMode(StrEnum):
    """How a released tile finds its target.

    ``zone``: the tile is dropped on a slot.
    ``overlap``: the tile swaps with the first tile its box overlaps.
    """

    ZONE = "zone"
    OVERLAP = "overlap"


@dataclass(frozen=True)
class GameSettings:
    tiles: int = 5
    mode: DragMode = DragMode.ZONE
    quiz: bool = True
    seed: int | None = None
    # strip size in terminal cells
    tile_width: int = 8
    tile_height: int = 6
    # how far one keypress nudges a held tile in overlap mode
    nudge: int = 2

    def __post_init__(self) -> None:
        if not MIN_TILES <= self.tiles <= MAX_TILES:
            raise ValueError(
                f"Tile count must be between {MIN_TILES} and {MAX_TILES}, "
                f"got {self.tiles}."
            )
        if self.nudge < 1:
            raise ValueError(f"Nudge must be at least 1 cell, got {self.nudge}.")

    def with_tiles(self, tiles: int) -> GameSettings:
        """Copy with the tile count clamped to the supported range."""
        tiles = max(MIN_TILES, min(MAX_TILES, tiles))
        return dataclasses.replace(self, tiles=tiles)

    def with_next_mode(self) -> GameSettings:
        mode = DragMode.OVERLAP if self.mode is DragMode.ZONE else DragMode.ZONE
        return dataclasses.replace(self, mode=mode)
