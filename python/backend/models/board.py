"""Board model for the strip puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Tile:
    """One vertical strip of the picture.

    ``original_index`` is the tile's identity and the slot it must occupy
    when the puzzle is solved.  ``current_index`` is the slot it occupies now.
    """

    original_index: int
    current_index: int

    @property
    def is_correct(self) -> bool:
        return self.original_index == self.current_index


@dataclass
class Board:
    """Represents the strip puzzle board.

    ``slots`` holds the tiles in slot order, so ``slots[i].current_index == i``
    for every ``i``.  Tiles are addressed by their ``original_index``.
    """

    size: int
    slots: list[Tile]
    _by_id: dict[int, Tile] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.validate()
        self._by_id = {t.original_index: t for t in self.slots}

    def validate(self) -> None:
        """Raise ValueError unless the slots hold a consistent permutation."""
        if self.size < 1:
            raise ValueError("A board needs at least one tile.")
        if len(self.slots) != self.size:
            raise ValueError(
                f"Expected {self.size} tiles, got {len(self.slots)}."
            )
        order = [t.original_index for t in self.slots]
        if sorted(order) != list(range(self.size)):
            raise ValueError(
                f"Expected a permutation of 0..{self.size - 1}, got {order}."
            )
        for slot, t in enumerate(self.slots):
            if t.current_index != slot:
                raise ValueError(
                    f"Tile {t.original_index} sits in slot {slot} "
                    f"but records slot {t.current_index}."
                )

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_order(cls, order: list[int]) -> Board:
        """Create a board from the original index found in each slot.

        Example::

            Board.from_order([3, 1, 4, 0, 2])
        """
        slots = [Tile(original_index=v, current_index=i) for i, v in enumerate(order)]
        return cls(size=len(order), slots=slots)

    # -- queries --------------------------------------------------------------

    @property
    def order(self) -> list[int]:
        """Original index of the tile in each slot, left to right."""
        return [t.original_index for t in self.slots]

    def tile(self, tile_id: int) -> Tile:
        try:
            return self._by_id[tile_id]
        except KeyError:
            raise ValueError(f"Unknown tile {tile_id!r}.") from None

    def tile_at(self, slot: int) -> Tile:
        if not 0 <= slot < self.size:
            raise ValueError(
                f"Slot {slot} is out of range for a {self.size}-tile board."
            )
        return self.slots[slot]

    def is_solved(self) -> bool:
        """Check if every tile sits in its own slot."""
        return all(t.is_correct for t in self.slots)

    def is_tile_correct(self, slot: int) -> bool:
        """Check if the tile in *slot* is in its goal position."""
        return self.tile_at(slot).is_correct

    def copy(self) -> Board:
        return Board(
            size=self.size,
            slots=[Tile(t.original_index, t.current_index) for t in self.slots],
        )
