#!/usr/bin/env python3
"""Strip Puzzle Game.

Usage::

    python main.py                     # interactive menu
    python main.py -f rich -n 6        # Rich terminal, 6 strips
    python main.py -f vanilla -m overlap
    python main.py -f rich --seed 7 -v # reproducible shuffle, debug log
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.settings import MAX_TILES, MIN_TILES, DragMode, GameSettings  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


def _menu_loop(settings: GameSettings) -> None:
    while True:
        print()
        print("  ====================================")
        print("        S T R I P   P U Z Z L E       ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            frontend = {"1": Frontend.vanilla, "2": Frontend.rich}[choice]
            mod = importlib.import_module(_RUNNERS[frontend])
            mod.run(settings)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    tiles: int = typer.Option(
        5, "-n", "--tiles",
        min=MIN_TILES, max=MAX_TILES,
        help=f"Number of strips ({MIN_TILES}-{MAX_TILES}).",
    ),
    mode: DragMode = typer.Option(
        DragMode.ZONE, "-m", "--mode",
        help="Drop on a slot (zone) or on the first overlapped strip (overlap).",
    ),
    quiz: bool = typer.Option(
        True, "--quiz/--no-quiz",
        help="Ask a question after the picture is restored.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the shuffle for a reproducible round.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log every swap and drop.",
    ),
) -> None:
    """Strip Puzzle Game."""
    _configure_logging(verbose)
    settings = GameSettings(tiles=tiles, mode=mode, quiz=quiz, seed=seed)

    if frontend is None:
        _menu_loop(settings)
        return

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(settings, menu=False)


if __name__ == "__main__":
    app()
