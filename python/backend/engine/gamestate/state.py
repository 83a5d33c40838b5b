"""Tracks the mutable state of a round in progress."""

from __future__ import annotations

import time
from enum import StrEnum

from backend.models.board import Board


class Phase(StrEnum):
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"


class GameState:
    """Holds the current board, phase, move counter, and elapsed time."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.phase = Phase.IN_PROGRESS
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    # -- phase ----------------------------------------------------------------

    @property
    def is_frozen(self) -> bool:
        return self.phase is Phase.SOLVED

    def mark_solved(self) -> bool:
        """Enter the terminal phase.  Returns False if already there."""
        if self.phase is Phase.SOLVED:
            return False
        self.phase = Phase.SOLVED
        self.pause()
        return True
