"""GamePlay tests — swaps, drop resolution, and the solved phase.

Boards are built with ``Board.from_order`` so every case starts from a known
arrangement; the order lists give the original index of the tile in each
slot, left to right.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gameplay import DropOutcome, GamePlay, TileMove
from backend.engine.gamestate import Phase
from backend.models.board import Board, Tile
from backend.models.geometry import Rect, StripLayout


# -- helpers ------------------------------------------------------------------


def _game(order: list[int], *, width: float = 10, rng: random.Random | None = None) -> GamePlay:
    layout = StripLayout(count=len(order), tile_width=width, tile_height=40)
    return GamePlay.from_board(Board.from_order(order), layout=layout, rng=rng)


def _record(game: GamePlay) -> tuple[list[list[TileMove]], list[object]]:
    moved: list[list[TileMove]] = []
    solved: list[object] = []
    game.tiles_moved.connect(lambda sender, moves: moved.append(moves), weak=False)
    game.solved.connect(lambda sender: solved.append(sender), weak=False)
    return moved, solved


def _assert_permutation(game: GamePlay) -> None:
    board = game.board
    assert sorted(t.current_index for t in board.slots) == list(range(board.size))
    for slot, tile in enumerate(board.slots):
        assert tile.current_index == slot


# -- initialisation -----------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 5, 9])
def test_new_round_is_a_permutation(size: int) -> None:
    game = GamePlay(size, rng=random.Random(size))
    _assert_permutation(game)
    assert sorted(game.board.order) == list(range(size))
    assert game.state.moves == 0


def test_bad_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        GamePlay(0)


def test_identity_shuffle_starts_solved() -> None:
    game = _game([0, 1, 2])
    assert game.is_solved
    assert game.state.phase is Phase.SOLVED
    assert game.swap(0, 1) is False


def test_from_board_rejects_inconsistent_board() -> None:
    board = Board.from_order([1, 0, 2])
    # tile 1 claims slot 1 while it is stored in slot 0
    board.slots[0].current_index = 1
    with pytest.raises(ValueError, match="records slot"):
        GamePlay.from_board(board)

    with pytest.raises(ValueError):
        GamePlay.from_board(Board(size=3, slots=[Tile(1, 1), Tile(0, 0), Tile(2, 2)]))


# -- swap ---------------------------------------------------------------------


def test_swap_exchanges_slots() -> None:
    game = _game([2, 0, 1])
    moved, _ = _record(game)

    assert game.swap(2, 1) is True
    assert game.board.order == [1, 0, 2]
    assert game.slot_of(2) == 2
    assert game.slot_of(1) == 0
    assert game.state.moves == 1
    assert moved == [[TileMove(2, 2), TileMove(1, 0)]]
    _assert_permutation(game)


def test_swap_twice_restores_board() -> None:
    game = _game([3, 0, 4, 1, 2])
    before = game.board.order

    for a in range(5):
        for b in range(5):
            if a == b:
                continue
            game.swap(a, b)
            game.swap(a, b)
            assert game.board.order == before, f"swap({a}, {b}) is not an involution"


def test_self_swap_is_a_noop() -> None:
    game = _game([1, 0, 2])
    moved, _ = _record(game)

    assert game.swap(1, 1) is False
    assert game.board.order == [1, 0, 2]
    assert game.state.moves == 0
    assert moved == []


def test_swap_unknown_tile_fails_fast() -> None:
    game = _game([1, 0, 2])
    with pytest.raises(ValueError):
        game.swap(0, 3)
    assert game.board.order == [1, 0, 2]


# -- solved phase -------------------------------------------------------------


def test_five_tile_scenario() -> None:
    game = _game([3, 1, 4, 0, 2])
    moved, solved = _record(game)

    game.swap(game.tile_at(0), game.tile_at(3))
    assert game.board.order == [0, 1, 4, 3, 2]
    assert not game.is_solved
    assert solved == []

    game.swap(game.tile_at(2), game.tile_at(4))
    assert game.board.order == [0, 1, 2, 3, 4]
    assert game.is_solved
    assert game.state.phase is Phase.SOLVED
    assert solved == [game]
    assert len(moved) == 2


def test_solved_round_is_frozen() -> None:
    game = _game([1, 0, 2])
    _, solved = _record(game)
    game.swap(0, 1)
    assert solved == [game]
    frozen_order = game.board.order

    assert game.swap(0, 2) is False
    assert game.resolve_drop(0, 2) is DropOutcome.FROZEN
    assert game.resolve_overlap(0, Rect(15, 0, 10, 40)) is DropOutcome.FROZEN
    assert game.resolve_point(0, 25, 5) is DropOutcome.FROZEN
    assert game.board.order == frozen_order
    assert game.state.moves == 1
    assert solved == [game], "solved must fire exactly once"


def test_solved_pauses_clock() -> None:
    game = _game([1, 0])
    game.swap(0, 1)
    elapsed = game.state.elapsed_time
    assert game.state.elapsed_time == elapsed


def test_frozen_still_rejects_bad_references() -> None:
    game = _game([0, 1])
    with pytest.raises(ValueError):
        game.swap(0, 5)
    with pytest.raises(ValueError):
        game.resolve_drop(0, 5)


# -- reset --------------------------------------------------------------------


def test_reset_starts_a_fresh_round() -> None:
    game = _game([1, 0, 2, 3, 4, 5], rng=random.Random(3))
    game.swap(0, 1)
    assert game.is_frozen

    game.reset()
    _assert_permutation(game)
    assert game.state.moves == 0
    assert game.size == 6
    if not game.is_solved:
        assert game.state.phase is Phase.IN_PROGRESS
        assert not game.is_frozen
    assert game.registration_order == tuple(game.board.order)


def test_reset_keeps_listeners_and_fires_again() -> None:
    game = _game([1, 0], rng=random.Random(0))
    _, solved = _record(game)
    game.swap(0, 1)

    for _ in range(20):
        game.reset()
        if not game.is_solved:
            a, b = game.board.order
            game.swap(a, b)
    assert len(solved) == 21
    assert game.is_frozen


def test_reset_can_change_size() -> None:
    game = _game([1, 0, 2])
    game.reset(7)
    assert game.size == 7
    assert game.layout is not None and game.layout.count == 7
    _assert_permutation(game)


# -- zone-based drop ----------------------------------------------------------


def test_drop_on_other_slot_swaps() -> None:
    game = _game([2, 0, 1])
    assert game.resolve_drop(2, 1) is DropOutcome.SWAPPED
    assert game.board.order == [0, 2, 1]


def test_drop_on_own_slot_reverts() -> None:
    game = _game([2, 0, 1])
    moved, _ = _record(game)
    assert game.resolve_drop(2, 0) is DropOutcome.REVERT
    assert game.board.order == [2, 0, 1]
    assert game.state.moves == 0
    assert moved == []


def test_drop_out_of_range_fails_fast() -> None:
    game = _game([2, 0, 1])
    with pytest.raises(ValueError):
        game.resolve_drop(2, 3)
    with pytest.raises(ValueError):
        game.resolve_drop(9, 0)


def test_drop_at_point() -> None:
    game = _game([2, 0, 1], width=10)
    assert game.resolve_point(2, 25, 20) is DropOutcome.SWAPPED
    assert game.board.order == [1, 0, 2]
    assert game.resolve_point(0, 99, 20) is DropOutcome.REVERT
    assert game.resolve_point(0, 5, 20) is DropOutcome.SWAPPED
    assert game.board.order == [0, 1, 2]


def test_point_drop_needs_layout() -> None:
    game = GamePlay.from_board(Board.from_order([1, 0]))
    with pytest.raises(ValueError, match="layout"):
        game.resolve_point(0, 1, 1)


# -- overlap-based drop -------------------------------------------------------


def test_overlap_swaps_with_covered_tile() -> None:
    game = _game([2, 0, 1, 3], width=10)
    # tile 2 rests in slot 0 (x 0..10); nudge it into slot 1
    assert game.resolve_overlap(2, Rect(6, 0, 10, 40)) is DropOutcome.SWAPPED
    assert game.board.order == [0, 2, 1, 3]


def test_overlap_none_reverts() -> None:
    game = _game([2, 0, 1, 3], width=10)
    # at rest, neighbours only touch edges
    assert game.resolve_overlap(0, Rect(10, 0, 10, 40)) is DropOutcome.REVERT
    assert game.resolve_overlap(0, Rect(10, 50, 10, 40)) is DropOutcome.REVERT
    assert game.board.order == [2, 0, 1, 3]


def test_overlap_tie_break_uses_registration_order() -> None:
    # registered left to right as 3, 1, 0, 2
    game = _game([3, 1, 0, 2], width=10)
    assert game.registration_order == (3, 1, 0, 2)

    # tile 2 (slot 3) dragged across slots 1 and 2: covers tiles 1 and 0;
    # tile 1 was registered first
    assert game.resolve_overlap(2, Rect(15, 0, 10, 40)) is DropOutcome.SWAPPED
    assert game.board.order == [3, 2, 0, 1]


def test_registration_order_survives_swaps() -> None:
    game = _game([3, 1, 0, 2], width=10)
    game.swap(3, 2)
    assert game.board.order == [2, 1, 0, 3]
    assert game.registration_order == (3, 1, 0, 2)

    # tile 1's box hits tiles 2 and 0; tile 0 was registered before tile 2
    # even though tile 2 now sits further left
    boxes = {2: Rect(0, 0, 10, 40), 0: Rect(20, 0, 10, 40), 3: Rect(30, 0, 10, 40)}
    assert game.resolve_overlap(1, Rect(5, 0, 20, 40), boxes) is DropOutcome.SWAPPED
    assert game.board.order == [2, 0, 1, 3]


def test_overlap_is_deterministic() -> None:
    outcomes = []
    for _ in range(5):
        game = _game([4, 3, 2, 1, 0], width=10)
        game.resolve_overlap(0, Rect(5, 0, 30, 40))
        outcomes.append(game.board.order)
    assert all(o == outcomes[0] for o in outcomes)


def test_overlap_with_explicit_boxes_skips_missing() -> None:
    game = GamePlay.from_board(Board.from_order([1, 0, 2]))
    boxes = {2: Rect(0, 0, 5, 5)}
    assert game.resolve_overlap(1, Rect(1, 1, 2, 2), boxes) is DropOutcome.SWAPPED
    assert game.board.order == [2, 0, 1]


def test_overlap_with_unknown_box_fails_fast() -> None:
    game = _game([1, 0, 2])
    with pytest.raises(ValueError):
        game.resolve_overlap(1, Rect(0, 0, 1, 1), {7: Rect(0, 0, 1, 1)})
    assert game.board.order == [1, 0, 2]


def test_rest_boxes_follow_current_slots() -> None:
    game = _game([2, 0, 1], width=10)
    boxes = game.rest_boxes()
    assert boxes[2] == Rect(0, 0, 10, 40)
    assert boxes[0] == Rect(10, 0, 10, 40)
    assert boxes[1] == Rect(20, 0, 10, 40)
