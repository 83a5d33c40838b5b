"""Generates shuffled strip puzzle boards."""

from __future__ import annotations

import random

from backend.models.board import Board, Tile


class GameGenerator:
    """Creates puzzles by shuffling the solved board."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (tile ``i`` in slot ``i``)."""
        if size < 1:
            raise ValueError(f"A board needs at least one tile, got {size}.")
        return Board(size=size, slots=[Tile(i, i) for i in range(size)])

    @staticmethod
    def shuffle(board: Board, rng: random.Random | None = None) -> None:
        """Shuffle *board* in-place into a uniformly random permutation.

        Every ordering, the identity included, is equally likely.
        """
        (rng or random).shuffle(board.slots)
        for slot, tile in enumerate(board.slots):
            tile.current_index = slot

    @staticmethod
    def generate(size: int, rng: random.Random | None = None) -> Board:
        """Return a freshly shuffled board of the given size."""
        board = GameGenerator.solved(size)
        GameGenerator.shuffle(board, rng)
        return board
