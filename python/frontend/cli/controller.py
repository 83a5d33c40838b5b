"""Keyboard drag-and-drop for the terminal frontends.

The terminal has no pointer, so a drag is played with the keyboard: move the
cursor to a strip, pick it up, carry it, and put it down.  In ``zone`` mode
the arrows move a drop marker from slot to slot; in ``overlap`` mode they
nudge the held strip a few cells at a time and the drop swaps it with the
first strip it covers.  Both frontends share this class; it only talks to
:class:`GamePlay` and never draws anything.
"""

from __future__ import annotations

from backend.engine.gameplay import DropOutcome, GamePlay
from backend.models.geometry import Rect, StripLayout
from backend.settings import DragMode


class DragController:
    def __init__(self, game: GamePlay, mode: DragMode, nudge: int = 1) -> None:
        if mode is DragMode.OVERLAP and game.layout is None:
            raise ValueError("Overlap mode needs a round with a layout.")
        self.game = game
        self.mode = mode
        self.nudge = nudge
        self.cursor = 0
        self.held: int | None = None
        self.target = 0
        self.offset = 0.0
        self.last_outcome: DropOutcome | None = None

    # -- state ----------------------------------------------------------------

    @property
    def holding(self) -> bool:
        return self.held is not None

    def held_box(self) -> Rect | None:
        """Where the held strip is drawn right now (overlap mode)."""
        if self.held is None or self.game.layout is None:
            return None
        return self._box_of(self.held, self.game.layout)

    def hover_slot(self) -> int | None:
        """Slot the held strip is currently over."""
        if self.held is None:
            return None
        if self.mode is DragMode.ZONE:
            return self.target
        layout = self._layout()
        box = self._box_of(self.held, layout)
        return layout.slot_at(box.centerx, box.y)

    def covered_slots(self) -> list[int]:
        """Slots whose at-rest boxes the held strip overlaps (overlap mode)."""
        box = self.held_box()
        if box is None or self.game.layout is None:
            return []
        layout = self.game.layout
        return [s for s in range(layout.count) if box.overlaps(layout.slot_rect(s))]

    # -- gestures -------------------------------------------------------------

    def left(self) -> None:
        self._step(-1)

    def right(self) -> None:
        self._step(1)

    def grab(self) -> bool:
        """Pick up the strip under the cursor."""
        if self.holding or self.game.is_frozen:
            return False
        self.held = self.game.tile_at(self.cursor)
        self.target = self.cursor
        self.offset = 0.0
        return True

    def drop(self) -> DropOutcome | None:
        """Release the held strip and resolve the gesture."""
        if self.held is None:
            return None
        tile = self.held
        if self.mode is DragMode.ZONE:
            outcome = self.game.resolve_drop(tile, self.target)
        else:
            outcome = self.game.resolve_overlap(tile, self._box_of(tile, self._layout()))
        self.held = None
        self.offset = 0.0
        self.cursor = self.game.slot_of(tile)
        self.last_outcome = outcome
        return outcome

    def cancel(self) -> None:
        """Put the held strip back without touching the board."""
        if self.held is not None:
            self.cursor = self.game.slot_of(self.held)
        self.held = None
        self.offset = 0.0
        self.last_outcome = DropOutcome.REVERT

    def press(self) -> DropOutcome | None:
        """Space / Enter: pick up when empty-handed, drop otherwise."""
        if self.holding:
            return self.drop()
        self.grab()
        return None

    def reset(self) -> None:
        self.cursor = 0
        self.held = None
        self.target = 0
        self.offset = 0.0
        self.last_outcome = None

    # -- helpers --------------------------------------------------------------

    def _layout(self) -> StripLayout:
        if self.game.layout is None:
            raise ValueError("Overlap mode needs a round with a layout.")
        return self.game.layout

    def _box_of(self, tile: int, layout: StripLayout) -> Rect:
        return layout.slot_rect(self.game.slot_of(tile)).moved(self.offset)

    def _step(self, direction: int) -> None:
        last = self.game.size - 1
        if self.held is None:
            self.cursor = min(last, max(0, self.cursor + direction))
        elif self.mode is DragMode.ZONE:
            self.target = min(last, max(0, self.target + direction))
        else:
            layout = self._layout()
            slot = self.game.slot_of(self.held)
            lo = -slot * layout.tile_width
            hi = (last - slot) * layout.tile_width
            self.offset = min(hi, max(lo, self.offset + direction * self.nudge))
