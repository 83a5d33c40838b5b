"""Strip puzzle solver."""

from __future__ import annotations

from backend.models.board import Board


class Solver:
    """Stateless solver — all methods are static.

    A board is a permutation of its tiles, so it splits into disjoint cycles
    and needs exactly ``size - cycles`` swaps.  Each swap below sends one
    tile home, which reaches that bound.
    """

    @staticmethod
    def solve(board: Board) -> list[tuple[int, int]]:
        """Return the tile pairs to swap, in order, or ``[]`` if solved."""
        order = board.order
        swaps: list[tuple[int, int]] = []
        for slot in range(board.size):
            while order[slot] != slot:
                home = order[slot]
                swaps.append((order[slot], order[home]))
                order[slot], order[home] = order[home], order[slot]
        return swaps

    @staticmethod
    def hint(board: Board) -> tuple[int, int] | None:
        """Return the single next swap, or ``None`` if solved."""
        moves = Solver.solve(board)
        return moves[0] if moves else None

    @staticmethod
    def min_swaps(board: Board) -> int:
        seen = [False] * board.size
        order = board.order
        cycles = 0
        for start in range(board.size):
            if seen[start]:
                continue
            cycles += 1
            slot = start
            while not seen[slot]:
                seen[slot] = True
                slot = order[slot]
        return board.size - cycles
