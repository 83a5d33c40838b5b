"""Solver tests.

Every arrangement of up to 6 tiles is solved and the returned swaps are
replayed through the real game engine, as the solver must both finish the
puzzle and use the fewest possible swaps.
"""

from __future__ import annotations

import itertools

import pytest

from backend.engine.gameplay.game import GamePlay
from backend.engine.gamesolver.solver import Solver
from backend.models.board import Board


# -- helpers ------------------------------------------------------------------


def _cycles(order: list[int]) -> int:
    seen: set[int] = set()
    count = 0
    for start in range(len(order)):
        if start in seen:
            continue
        count += 1
        slot = start
        while slot not in seen:
            seen.add(slot)
            slot = order[slot]
    return count


def _ids(order: tuple[int, ...]) -> str:
    return "".join(map(str, order))


def _assert_solve(order: list[int]) -> None:
    board = Board.from_order(order)
    swaps = Solver.solve(board)

    # ---- swap-list sanity ---------------------------------------------------
    assert len(swaps) == len(order) - _cycles(order), f"not optimal for {order}"
    assert len(swaps) == Solver.min_swaps(board)
    assert board.order == order, "solve() must not mutate the board"

    # ---- replay via the real game engine ------------------------------------
    game = GamePlay.from_board(board)
    for i, (a, b) in enumerate(swaps):
        assert a != b
        assert game.swap(a, b), f"swap {i} ({a}, {b}) was rejected for {order}"

    assert game.is_solved, f"Board {order} not solved after {len(swaps)} swaps"


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("size", [1, 2, 3, 4, 5, 6])
def test_solve_every_arrangement(size: int) -> None:
    for order in itertools.permutations(range(size)):
        _assert_solve(list(order))


@pytest.mark.parametrize(
    "order",
    [(3, 1, 4, 0, 2), (1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0), (11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0)],
    ids=_ids,
)
def test_solve_large(order: tuple[int, ...]) -> None:
    _assert_solve(list(order))


def test_solved_board_needs_nothing() -> None:
    board = Board.from_order([0, 1, 2])
    assert Solver.solve(board) == []
    assert Solver.hint(board) is None
    assert Solver.min_swaps(board) == 0


def test_hint_sends_one_tile_home() -> None:
    board = Board.from_order([3, 1, 4, 0, 2])
    hint = Solver.hint(board)
    assert hint == (3, 0)

    game = GamePlay.from_board(board)
    game.swap(*hint)
    assert game.board.order == [0, 1, 4, 3, 2]
