"""Slot geometry: bounding boxes and the side-by-side strip layout."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def centerx(self) -> float:
        return self.x + self.width / 2

    def overlaps(self, other: Rect) -> bool:
        """True if the two boxes share some area.  Touching edges do not count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def moved(self, dx: float, dy: float = 0) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)


@dataclass(frozen=True)
class StripLayout:
    """``count`` vertical slots of equal size laid out left to right."""

    count: int
    tile_width: float
    tile_height: float
    origin_x: float = 0.0
    origin_y: float = 0.0

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Layout needs at least one slot, got {self.count}.")
        if self.tile_width <= 0 or self.tile_height <= 0:
            raise ValueError(
                f"Tile size must be positive, got "
                f"{self.tile_width}×{self.tile_height}."
            )

    @property
    def width(self) -> float:
        return self.count * self.tile_width

    @property
    def bounds(self) -> Rect:
        return Rect(self.origin_x, self.origin_y, self.width, self.tile_height)

    def slot_rect(self, slot: int) -> Rect:
        if not 0 <= slot < self.count:
            raise ValueError(
                f"Slot {slot} is out of range for a {self.count}-slot layout."
            )
        return Rect(
            self.origin_x + slot * self.tile_width,
            self.origin_y,
            self.tile_width,
            self.tile_height,
        )

    def slot_at(self, x: float, y: float) -> int | None:
        """Return the slot (drop zone) under the point, or ``None``."""
        if not self.bounds.contains(x, y):
            return None
        return int((x - self.origin_x) // self.tile_width)
