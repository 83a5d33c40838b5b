"""Core gameplay logic — applies swaps and drops, checks the win condition."""

from __future__ import annotations

import dataclasses
import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from blinker import Signal

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState
from backend.models.board import Board, Tile
from backend.models.geometry import Rect, StripLayout

logger = logging.getLogger(__name__)


class DropOutcome(StrEnum):
    SWAPPED = "swapped"
    # no valid target: the host snaps the tile back to its slot
    REVERT = "revert"
    # the round is already solved and the board no longer changes
    FROZEN = "frozen"


@dataclass(frozen=True)
class TileMove:
    """Tells the host that *tile* now belongs in *slot*."""

    tile: int
    slot: int


class GamePlay:
    """Orchestrates a single round and owns the tile permutation.

    Tiles are addressed by their original index.  Two signals are exposed:

    ``tiles_moved``
        Sent after every swap with ``moves=[TileMove, TileMove]``.
    ``solved``
        Sent once per round, without payload, when the last tile lands in
        its slot.  A shuffle can come out already solved; in that case the
        round starts in the solved phase, so check :attr:`is_frozen` after
        connecting.
    """

    def __init__(
        self,
        size: int,
        *,
        layout: StripLayout | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._setup(layout, rng)
        self._start(GameGenerator.generate(size, self._rng))

    @classmethod
    def from_board(
        cls,
        board: Board,
        *,
        layout: StripLayout | None = None,
        rng: random.Random | None = None,
    ) -> "GamePlay":
        """Create a round from an existing board (e.g. a known arrangement)."""
        board.validate()
        obj = object.__new__(cls)
        obj._setup(layout, rng)
        obj._start(board)
        return obj

    def _setup(self, layout: StripLayout | None, rng: random.Random | None) -> None:
        self.layout = layout
        self._rng = rng or random.Random()
        self.tiles_moved = Signal("tiles_moved")
        self.solved = Signal("solved")

    def _start(self, board: Board) -> None:
        if self.layout is not None and self.layout.count != board.size:
            self.layout = dataclasses.replace(self.layout, count=board.size)
        self.size = board.size
        self.state = GameState(board)
        # Overlap resolution visits tiles in the order they were laid out
        # at the start of the round; swaps never change it.
        self._registration: tuple[int, ...] = tuple(board.order)
        logger.info("New round: %d tiles, order %s", board.size, board.order)
        self._check_solved()

    # -- commands -------------------------------------------------------------

    def reset(self, size: int | None = None) -> None:
        """Start a new round with a fresh shuffle."""
        if size is None:
            size = self.size
        self._start(GameGenerator.generate(size, self._rng))

    def swap(self, tile_a: int, tile_b: int) -> bool:
        """Exchange the slots of two tiles.

        Returns True if the board changed.  Swapping a tile with itself and
        any swap after the round is solved are no-ops.
        """
        board = self.state.board
        a = board.tile(tile_a)
        b = board.tile(tile_b)

        if self.state.is_frozen:
            logger.debug("Ignoring swap %d<->%d: round is solved", tile_a, tile_b)
            return False
        if a is b:
            return False

        self._swap(board, a, b)
        self.state.increment_moves()
        logger.debug(
            "Swapped tile %d -> slot %d, tile %d -> slot %d",
            tile_a, a.current_index, tile_b, b.current_index,
        )
        self.tiles_moved.send(
            self,
            moves=[TileMove(tile_a, a.current_index), TileMove(tile_b, b.current_index)],
        )
        self._check_solved()
        return True

    def resolve_drop(self, tile: int, slot: int) -> DropOutcome:
        """Zone-based drop: swap *tile* with whatever occupies *slot*."""
        board = self.state.board
        dragged = board.tile(tile)
        occupant = board.tile_at(slot)

        if self.state.is_frozen:
            return DropOutcome.FROZEN
        if occupant is dragged:
            logger.debug("Tile %d dropped on its own slot", tile)
            return DropOutcome.REVERT

        self.swap(dragged.original_index, occupant.original_index)
        return DropOutcome.SWAPPED

    def resolve_point(self, tile: int, x: float, y: float) -> DropOutcome:
        """Zone-based drop where only the release point is known."""
        layout = self._require_layout()
        self.state.board.tile(tile)

        slot = layout.slot_at(x, y)
        if self.state.is_frozen:
            return DropOutcome.FROZEN
        if slot is None:
            logger.debug("Tile %d released outside every zone", tile)
            return DropOutcome.REVERT
        return self.resolve_drop(tile, slot)

    def resolve_overlap(
        self,
        tile: int,
        box: Rect,
        boxes: Mapping[int, Rect] | None = None,
    ) -> DropOutcome:
        """Overlap-based drop: swap with the first tile *box* overlaps.

        Candidates are visited in registration order, so when the dragged
        box covers several tiles the earliest registered one wins.  *boxes*
        gives each tile's bounding box; tiles missing from it are skipped.
        Without *boxes* every tile is assumed to rest in its slot of
        :attr:`layout`.
        """
        board = self.state.board
        board.tile(tile)
        if boxes is None:
            boxes = self.rest_boxes()
        else:
            for tile_id in boxes:
                board.tile(tile_id)

        if self.state.is_frozen:
            return DropOutcome.FROZEN

        for other in self._registration:
            if other == tile:
                continue
            other_box = boxes.get(other)
            if other_box is not None and box.overlaps(other_box):
                self.swap(tile, other)
                return DropOutcome.SWAPPED

        logger.debug("Tile %d overlaps no other tile", tile)
        return DropOutcome.REVERT

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def is_solved(self) -> bool:
        return self.state.board.is_solved()

    @property
    def is_frozen(self) -> bool:
        return self.state.is_frozen

    @property
    def registration_order(self) -> tuple[int, ...]:
        return self._registration

    def slot_of(self, tile: int) -> int:
        return self.state.board.tile(tile).current_index

    def tile_at(self, slot: int) -> int:
        return self.state.board.tile_at(slot).original_index

    def rest_boxes(self) -> dict[int, Rect]:
        """Bounding box of every tile sitting in its current slot."""
        layout = self._require_layout()
        return {
            t.original_index: layout.slot_rect(t.current_index)
            for t in self.state.board.slots
        }

    # -- helpers --------------------------------------------------------------

    def _require_layout(self) -> StripLayout:
        if self.layout is None:
            raise ValueError("This round was created without a layout.")
        return self.layout

    def _check_solved(self) -> None:
        if self.state.board.is_solved() and self.state.mark_solved():
            logger.info("Puzzle solved after %d moves", self.state.moves)
            self.solved.send(self)

    @staticmethod
    def _swap(board: Board, a: Tile, b: Tile) -> None:
        ia, ib = a.current_index, b.current_index
        a.current_index, b.current_index = ib, ia
        board.slots[ia], board.slots[ib] = board.slots[ib], board.slots[ia]
