"""Vanilla terminal frontend — no third-party rendering.

Uses only print and ANSI codes (24-bit colour for the strips).  Shares the
input handler and drag controller with the Rich frontend.
"""

from __future__ import annotations

import random
import sys
import time

from backend.engine.gameplay import DropOutcome, GamePlay
from backend.engine.gamesolver import Solver
from backend.engine.quiz import NoSelectionError, Quiz
from backend.models.geometry import StripLayout
from backend.settings import MAX_TILES, MIN_TILES, DragMode, GameSettings
from frontend.cli.controller import DragController
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.cli.palette import label_for, strip_colours


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_M = "\033[35;1m"    # bold magenta
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _bg(rgb: tuple[int, int, int]) -> str:
    return "\033[48;2;{};{};{}m\033[30;1m".format(*rgb)


def _fg(rgb: tuple[int, int, int]) -> str:
    return "\033[38;2;{};{};{}m".format(*rgb)


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}" if m else f"{s}s"


def _stats_line(game: GamePlay) -> str:
    return (
        f"  Swaps: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}"
    )


# -- board rendering ----------------------------------------------------------


def _render_board(
    game: GamePlay,
    ctl: DragController | None,
    settings: GameSettings,
    selected: set[int] | None = None,
    cursor: int | None = None,
) -> str:
    """Return the strips as ANSI text, with a marker row above and below."""
    width, height = settings.tile_width, settings.tile_height
    board = game.board
    held = ctl.held if ctl is not None else None
    hover = ctl.hover_slot() if ctl is not None else None
    covered = set(ctl.covered_slots()) if ctl is not None else set()
    if cursor is None and ctl is not None and held is None:
        cursor = ctl.cursor

    top = []
    for slot in range(board.size):
        if held is not None and slot == hover:
            top.append(f"{_Y}{('v ' + label_for(held) + ' v'):^{width}}{_R}")
        elif slot in covered:
            top.append(f"{_Y}{'v':^{width}}{_R}")
        else:
            top.append(" " * width)
    lines = ["  " + " ".join(top)]

    mid = height // 2
    for row in range(height):
        cells = []
        for tile in board.slots:
            colours = strip_colours(tile.original_index, board.size, width)
            if tile.original_index == held:
                cells.append("".join(f"{_fg(c)}░" for c in colours) + _R)
                continue
            text = " " * width
            if row == mid:
                text = f"{label_for(tile.original_index):^{width}}"
            cells.append("".join(f"{_bg(c)}{ch}" for c, ch in zip(colours, text)) + _R)
        lines.append("  " + " ".join(cells))

    bottom = []
    for slot, tile in enumerate(board.slots):
        mark = ""
        if selected is not None and tile.original_index in selected:
            mark = f"{_M}*{_R}"
        if slot == cursor:
            mark += f"{_C}^{_R}"
        elif selected is None and tile.is_correct:
            mark += f"{_G}ok{_R}"
        pad = width - _visible_len(mark)
        bottom.append(" " * (pad // 2) + mark + " " * (pad - pad // 2))
    lines.append("  " + " ".join(bottom))
    return "\n".join(lines)


def _visible_len(s: str) -> int:
    out, skip = 0, False
    for ch in s:
        if ch == "\033":
            skip = True
        elif skip:
            skip = ch != "m"
        else:
            out += 1
    return out


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    """Apply a single solver hint.  Returns a status message."""
    hint = Solver.hint(game.board)
    if hint is None:
        return f"{_G}Already solved!{_R}"
    a, b = hint
    game.swap(a, b)
    return f"{_C}Hint:{_R} swapped {_BOLD}{label_for(a)}{_R} and {_BOLD}{label_for(b)}{_R}"


def _auto_solve(game: GamePlay, ctl: DragController, settings: GameSettings) -> str:
    """Run the solver and animate the swaps.  Returns a status message."""
    moves = Solver.solve(game.board)
    if not moves:
        return f"{_G}Already solved!{_R}"

    for i, (a, b) in enumerate(moves):
        game.swap(a, b)
        _clear()
        print(f"  {_C}=== Solving… ({game.size} strips) ==={_R}")
        print()
        print(_render_board(game, None, settings))
        print()
        print(f"  Swap {i + 1}/{len(moves)}  ({label_for(a)} <-> {label_for(b)})")
        sys.stdout.flush()
        time.sleep(0.25)

    ctl.reset()
    return f"{_G}Solved in {len(moves)} swaps!{_R}"


# -- game screens -------------------------------------------------------------


def _controls(ctl: DragController, *, study: bool) -> str:
    if ctl.holding:
        verb = "move" if ctl.mode is DragMode.ZONE else "nudge"
        drag = f"{_C}A/D{_R}/{_C}Arrows{_R}: {verb}  |  {_C}Space{_R}: drop  |  {_C}C{_R}: put back"
    else:
        drag = f"{_C}A/D{_R}/{_C}Arrows{_R}: choose  |  {_C}Space{_R}: pick up"
    extra = f"{_C}N{_R}: hint  |  "
    if study:
        extra += f"{_C}V{_R}: solve  |  {_Y}R{_R}: shuffle  |  "
    else:
        extra += f"{_C}R{_R}: restart  |  "
    return f"  {drag}\n  {extra}{_C}Q{_R}: back"


def _show_game(
    game: GamePlay,
    ctl: DragController,
    settings: GameSettings,
    status: str = "",
    *,
    study: bool = False,
) -> None:
    """Draw the full game screen.

    In play mode the stats line is printed last without a trailing newline,
    so ``_update_time`` can overwrite it in place with ``\\r\\033[K``.
    """
    _clear()
    if study:
        print(f"  {_Y}=== Study ({game.size} strips) ==={_R}")
    else:
        print(f"  {_C}=== Strip Puzzle ({game.size} strips, {ctl.mode.value}) ==={_R}")
    print()
    print(_render_board(game, ctl, settings))
    print()
    print(_controls(ctl, study=study))
    if status:
        print(f"  {status}")
    if not study:
        sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_win(game: GamePlay, settings: GameSettings) -> None:
    _clear()
    print(f"  {_G}=== Strip Puzzle ({game.size} strips) ==={_R}")
    print()
    print(_render_board(game, None, settings))
    print()
    print(f"  {_G}★ CONGRATULATIONS! The picture is whole again! ★{_R}")
    print()
    print(_stats_line(game))


def _notice(message: str) -> None:
    print()
    print(f"  {_BOLD}\033[41m  {message}  {_R}")
    print(f"  {_DIM}Press any key to continue.{_R}")
    get_key()


# -- post-solve question ------------------------------------------------------


def _ask_question(game: GamePlay, settings: GameSettings, rng: random.Random) -> None:
    quiz = Quiz.random(game.size, rng)
    cursor = 0
    status = ""

    while True:
        _clear()
        print(f"  {_M}=== Question ==={_R}")
        print()
        print(f"  {_BOLD}{quiz.question.prompt}{_R}")
        print()
        print(_render_board(game, None, settings, selected=quiz.selected, cursor=cursor))
        print()
        print(
            f"  {_C}A/D{_R}: choose  |  {_C}Space{_R}: select  |  "
            f"{_C}Enter{_R}: answer  |  {_C}Q{_R}: skip"
        )
        if status:
            print(f"\n  {status}")
        status = ""
        key = get_key()

        if key == "left":
            cursor = max(0, cursor - 1)
        elif key == "right":
            cursor = min(game.size - 1, cursor + 1)
        elif key == "select":
            quiz.toggle(game.tile_at(cursor))
        elif key == "enter":
            try:
                correct = quiz.submit()
            except NoSelectionError as exc:
                _notice(str(exc))
                continue
            if correct:
                print(f"\n  {_G}Correct!{_R}")
                time.sleep(0.8)
                return
            status = f"{_Y}Not quite, try again.{_R}"
        elif key in ("quit", "cancel"):
            return


# -- game loops ---------------------------------------------------------------


def _handle_drag_key(key: str, ctl: DragController) -> str | None:
    if key == "left":
        ctl.left()
    elif key == "right":
        ctl.right()
    elif key in ("select", "enter"):
        if ctl.press() is DropOutcome.REVERT:
            return f"{_DIM}No target, the strip went back.{_R}"
    elif key == "cancel":
        if ctl.holding:
            ctl.cancel()
            return f"{_DIM}Put back.{_R}"
    else:
        return None
    return ""


def _new_game(settings: GameSettings, rng: random.Random) -> GamePlay:
    layout = StripLayout(settings.tiles, settings.tile_width, settings.tile_height)
    return GamePlay(settings.tiles, layout=layout, rng=rng)


def _play_game(settings: GameSettings, rng: random.Random) -> None:
    """Play mode — hint only, timed."""
    game = _new_game(settings, rng)
    ctl = DragController(game, settings.mode, settings.nudge)

    while True:
        status = ""
        while not game.is_frozen:
            _show_game(game, ctl, settings, status)

            # Update the time display every 0.5 s while waiting.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            status = _handle_drag_key(key, ctl) or ""
            if key == "hint":
                status = _apply_hint(game)
            elif key == "restart":
                game.reset()
                ctl.reset()
            elif key == "quit":
                return

        # -- solved ------------------------------------------------------------
        _show_win(game, settings)
        if settings.quiz:
            time.sleep(0.8)
            _ask_question(game, settings, rng)
            _show_win(game, settings)

        print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")
        while True:
            key = get_key()
            if key == "restart":
                game.reset()
                ctl.reset()
                break
            if key == "quit":
                return


def _study_game(settings: GameSettings, rng: random.Random) -> None:
    """Study mode — untimed, hint and auto-solve available."""
    game = _new_game(settings, rng)
    ctl = DragController(game, settings.mode, settings.nudge)
    status = ""

    while True:
        if game.is_frozen and not status:
            status = f"{_G}Solved! Press R to shuffle.{_R}"
        _show_game(game, ctl, settings, status, study=True)
        key = get_key()

        status = _handle_drag_key(key, ctl) or ""
        if key == "restart":
            game.reset()
            ctl.reset()
            status = f"{_Y}Shuffled!{_R}"
        elif key == "hint":
            status = _apply_hint(game)
        elif key == "solve":
            status = _auto_solve(game, ctl, settings)
        elif key == "quit":
            return


# -- menu loop ----------------------------------------------------------------


def _show_menu(settings: GameSettings) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}       S T R I P   P U Z Z L E       {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()
    counts = " ".join(
        f"{_BOLD}{_G}[{n}]{_R}" if n == settings.tiles else f"{_DIM} {n} {_R}"
        for n in range(MIN_TILES, MAX_TILES + 1)
    )
    print(f"    {counts}")
    print(f"    {_DIM}← →  number of strips{_R}")
    print()
    print(f"    Drop mode: {_M}{settings.mode.value}{_R}   {_DIM}(M to switch){_R}")
    print()
    print(f"    {_C}1{_R}  Play")
    print(f"    {_Y}2{_R}  Study")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


def _menu_loop(settings: GameSettings) -> None:
    rng = random.Random(settings.seed)

    while True:
        _show_menu(settings)
        key = get_key()

        if key in ("quit", "cancel"):
            _clear()
            print("  Goodbye!\n")
            return
        elif key == "left":
            settings = settings.with_tiles(settings.tiles - 1)
        elif key == "right":
            settings = settings.with_tiles(settings.tiles + 1)
        elif key in ("m", "M"):
            settings = settings.with_next_mode()
        elif key in ("1", "enter"):
            _play_game(settings, rng)
        elif key == "2":
            _study_game(settings, rng)


# -- public entry point -------------------------------------------------------


def run(settings: GameSettings, menu: bool = True) -> None:
    """Launch the vanilla CLI, with the menu or straight into play."""
    if menu:
        _menu_loop(settings)
    else:
        _play_game(settings, random.Random(settings.seed))
