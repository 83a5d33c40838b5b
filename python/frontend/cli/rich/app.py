"""Rich terminal frontend — coloured strips, panels, and a menu.

Uses the ``rich`` library for styled output while sharing the same input
handler and drag controller as the vanilla CLI.  Includes a built-in menu
for tile count, play, study, and the drop mode.
"""

from __future__ import annotations

import random
import sys
import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import DropOutcome, GamePlay, TileMove
from backend.engine.gamesolver import Solver
from backend.engine.quiz import NoSelectionError, Quiz
from backend.models.geometry import StripLayout
from backend.settings import MAX_TILES, MIN_TILES, DragMode, GameSettings
from frontend.cli.controller import DragController
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.cli.palette import label_for, strip_colours

console = Console()


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _new_game(settings: GameSettings, rng: random.Random) -> GamePlay:
    layout = StripLayout(
        count=settings.tiles,
        tile_width=settings.tile_width,
        tile_height=settings.tile_height,
    )
    return GamePlay(settings.tiles, layout=layout, rng=rng)


def _describe_moves(moves: list[TileMove]) -> str:
    return "   ".join(
        f"[bold]{label_for(m.tile)}[/bold] → slot {m.slot + 1}" for m in moves
    )


# -- board rendering ----------------------------------------------------------


def _strip_text(tile: int, settings: GameSettings, *, lifted: bool) -> Text:
    """The picture slice for *tile*, one styled cell per column."""
    width, height = settings.tile_width, settings.tile_height
    colours = strip_colours(tile, settings.tiles, width)
    label = label_for(tile)
    start = (width - len(label)) // 2
    mid = height // 2

    lines: list[Text] = []
    for row in range(height):
        line = Text()
        for col, (r, g, b) in enumerate(colours):
            if lifted:
                line.append("░", style=f"rgb({r},{g},{b})")
                continue
            ch = " "
            if row == mid and start <= col < start + len(label):
                ch = label[col - start]
            line.append(ch, style=f"bold black on rgb({r},{g},{b})")
        lines.append(line)
    return Text("\n").join(lines)


def _render_board(
    game: GamePlay,
    ctl: DragController | None,
    settings: GameSettings,
    selected: set[int] | None = None,
    cursor: int | None = None,
) -> Table:
    """Return a Rich Table: drag markers, the strips, then slot markers."""
    width = settings.tile_width
    board = game.board
    table = Table(
        show_header=False,
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(board.size):
        table.add_column(width=width, justify="center", no_wrap=True)

    held = ctl.held if ctl is not None else None
    hover = ctl.hover_slot() if ctl is not None else None
    covered = set(ctl.covered_slots()) if ctl is not None else set()
    if cursor is None and ctl is not None and held is None:
        cursor = ctl.cursor

    top: list[Text] = []
    for slot in range(board.size):
        if held is not None and slot == hover:
            top.append(Text(f"▼ {label_for(held)} ▼", style="bold yellow"))
        elif slot in covered:
            top.append(Text("▼", style="yellow"))
        else:
            top.append(Text(""))
    table.add_row(*top)

    table.add_row(
        *(
            _strip_text(t.original_index, settings, lifted=t.original_index == held)
            for t in board.slots
        )
    )

    bottom: list[Text] = []
    for slot, tile in enumerate(board.slots):
        cell = Text()
        if selected is not None and tile.original_index in selected:
            cell.append("◉ ", style="bold magenta")
        if slot == cursor:
            cell.append("▲", style="bold cyan")
        elif selected is None and tile.is_correct:
            cell.append("✓", style="bold green")
        bottom.append(cell)
    table.add_row(*bottom)

    return table


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    hint = Solver.hint(game.board)
    if hint is None:
        return "[green]Already solved![/green]"
    a, b = hint
    game.swap(a, b)
    return f"[cyan]Hint:[/cyan] swapped [bold]{label_for(a)}[/bold] and [bold]{label_for(b)}[/bold]"


def _auto_solve(game: GamePlay, ctl: DragController, settings: GameSettings) -> str:
    moves = Solver.solve(game.board)
    if not moves:
        return "[green]Already solved![/green]"

    for i, (a, b) in enumerate(moves):
        game.swap(a, b)
        console.clear()
        progress = Text()
        progress.append(f"  Solving… swap {i + 1}/{len(moves)} ", style="bold cyan")
        progress.append(f"({label_for(a)} ↔ {label_for(b)})", style="dim")

        panel = Panel(
            Align.center(_render_board(game, None, settings)),
            title=f"[bold cyan]Auto-Solve  {game.size} strips[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        sys.stdout.flush()
        time.sleep(0.25)

    ctl.reset()
    return f"[bold green]Solved in {len(moves)} swaps![/bold green]"


# -- menu screen --------------------------------------------------------------


def _draw_menu(settings: GameSettings) -> None:
    """Draw the main menu."""
    console.clear()

    counts = Text()
    for n in range(MIN_TILES, MAX_TILES + 1):
        if n > MIN_TILES:
            counts.append(" ")
        if n == settings.tiles:
            counts.append(f" {n} ", style="bold green on #313244")
        else:
            counts.append(f" {n} ", style="dim")

    nav = Text("  ← →  number of strips", style="dim")

    mode = Text()
    mode.append("  Drop mode: ", style="dim")
    mode.append(settings.mode.value, style="bold magenta")
    mode.append("   (M to switch)", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="bold yellow")
    opts.append("  Study    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(counts),
        Align.center(nav),
        Text(""),
        Align.center(mode),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]S T R I P   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _controls(ctl: DragController, *, study: bool) -> Text:
    controls = Text()
    controls.append("  ←→", style="bold cyan")
    if not ctl.holding:
        controls.append("  choose   ", style="dim")
        controls.append("Space", style="bold cyan")
        controls.append("  pick up   ", style="dim")
    else:
        action = "move" if ctl.mode is DragMode.ZONE else "nudge"
        controls.append(f"  {action}   ", style="dim")
        controls.append("Space", style="bold cyan")
        controls.append("  drop   ", style="dim")
        controls.append("C", style="bold cyan")
        controls.append("  put back   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    if study:
        controls.append("V", style="bold cyan")
        controls.append("  solve   ", style="dim")
    controls.append("R", style="bold yellow" if study else "bold cyan")
    controls.append("  shuffle   " if study else "  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")
    return controls


def _draw_game(
    game: GamePlay,
    ctl: DragController,
    settings: GameSettings,
    status: str = "",
    *,
    study: bool = False,
) -> None:
    """Draw the game screen (play mode shows stats, study mode does not)."""
    console.clear()

    if study:
        title = f"[bold yellow]Study  {game.size} strips[/bold yellow]"
        border = "yellow"
    else:
        title = f"[bold cyan]Strip Puzzle  {game.size} strips  ({ctl.mode.value})[/bold cyan]"
        border = "bright_blue"

    panel = Panel(
        Align.center(_render_board(game, ctl, settings)),
        title=title,
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    if not study:
        # Save the cursor right before the stats line so _update_time() can
        # come back and overwrite only this line.
        sys.stdout.write("\033[s")
        sys.stdout.flush()
        console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(ctl, study=study)))


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Swaps: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    return stats


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats line using the saved cursor position.

    Raw ANSI codes bypass Rich so only that one line is repainted.
    """
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    m, s = divmod(int(game.state.elapsed_time), 60)
    stats_raw = (
        f"{_DIM}Swaps: {_RS}{_YB}{game.state.moves}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{m:02d}:{s:02d}{_RS}"
    )
    visible_len = len(f"Swaps: {game.state.moves}    Time: {m:02d}:{s:02d}")
    pad = max(0, (console.width - visible_len) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_win(game: GamePlay, settings: GameSettings) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  The picture is whole again!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    group = Group(
        Align.center(_render_board(game, None, settings)),
        Align.center(congrats),
        Align.center(_stats(game)),
    )

    panel = Panel(
        group,
        title=f"[bold green]Strip Puzzle  {game.size} strips[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _notice(message: str) -> None:
    """Blocking notice; returns once the player presses a key."""
    panel = Panel(
        Align.center(Text(message, style="bold")),
        title="[bold red]![/bold red]",
        border_style="red",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("Press any key to continue.", style="dim")))
    get_key()


# -- post-solve question ------------------------------------------------------


def _draw_quiz(
    game: GamePlay, quiz: Quiz, cursor: int, settings: GameSettings, status: str
) -> None:
    console.clear()

    controls = Text()
    controls.append("  ←→", style="bold cyan")
    controls.append("  choose   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  select   ", style="dim")
    controls.append("Enter", style="bold cyan")
    controls.append("  answer   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  skip", style="dim")

    panel = Panel(
        Group(
            Align.center(Text(quiz.question.prompt, style="bold")),
            Text(""),
            Align.center(
                _render_board(game, None, settings, selected=quiz.selected, cursor=cursor)
            ),
        ),
        title="[bold magenta]Question[/bold magenta]",
        border_style="magenta",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _ask_question(game: GamePlay, settings: GameSettings, rng: random.Random) -> None:
    quiz = Quiz.random(game.size, rng)
    cursor = 0
    status = ""

    while True:
        _draw_quiz(game, quiz, cursor, settings, status)
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
                _draw_quiz(game, quiz, cursor, settings, "[bold green]Correct![/bold green]")
                time.sleep(0.8)
                return
            status = "[yellow]Not quite, try again.[/yellow]"
        elif key in ("quit", "cancel"):
            return


# -- game loops ---------------------------------------------------------------


def _handle_drag_key(key: str, ctl: DragController) -> str | None:
    """Apply a drag key.  Returns a status message, or None if not a drag key."""
    if key == "left":
        ctl.left()
    elif key == "right":
        ctl.right()
    elif key in ("select", "enter"):
        outcome = ctl.press()
        if outcome is DropOutcome.REVERT:
            return "[dim]No target, the strip went back.[/dim]"
    elif key == "cancel":
        if ctl.holding:
            ctl.cancel()
            return "[dim]Put back.[/dim]"
    else:
        return None
    return ""


def _play_game(settings: GameSettings, rng: random.Random) -> None:
    """Play mode — hint only, timed."""
    game = _new_game(settings, rng)
    ctl = DragController(game, settings.mode, settings.nudge)
    moved: list[str] = []
    game.tiles_moved.connect(
        lambda sender, moves: moved.append(_describe_moves(moves)), weak=False
    )

    while True:
        status = ""
        while not game.is_frozen:
            _draw_game(game, ctl, settings, status)

            # Short timeout so the clock keeps ticking.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            moved.clear()
            status = _handle_drag_key(key, ctl) or ""
            if key == "hint":
                status = _apply_hint(game)
            elif key == "restart":
                game.reset()
                ctl.reset()
            elif key == "quit":
                return
            if moved and not status:
                status = moved[-1]

        # -- solved ------------------------------------------------------------
        _draw_win(game, settings)
        if settings.quiz:
            time.sleep(0.8)
            _ask_question(game, settings, rng)
            _draw_win(game, settings)

        console.print(
            Align.center(
                Text("\n  Press R to play again, Q to go back.\n", style="dim")
            )
        )

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
        if game.is_frozen:
            status = status or "[green]Solved! Press R to shuffle.[/green]"
        _draw_game(game, ctl, settings, status, study=True)
        key = get_key()

        status = _handle_drag_key(key, ctl) or ""
        if key == "restart":
            game.reset()
            ctl.reset()
            status = "[yellow]Shuffled![/yellow]"
        elif key == "hint":
            status = _apply_hint(game)
        elif key == "solve":
            status = _auto_solve(game, ctl, settings)
        elif key == "quit":
            return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(settings: GameSettings) -> None:
    rng = random.Random(settings.seed)

    while True:
        _draw_menu(settings)
        key = get_key()

        if key in ("quit", "cancel"):
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
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
    """Launch the Rich CLI, with the interactive menu or straight into play."""
    if menu:
        _menu_loop(settings)
    else:
        _play_game(settings, random.Random(settings.seed))
