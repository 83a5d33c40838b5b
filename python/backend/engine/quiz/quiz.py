"""Multiple-choice question asked once the picture is restored.

The player answers by selecting tiles.  Submitting with nothing selected is
rejected with :class:`NoSelectionError`; the host tells the player and lets
them try again as often as they like.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class QuizError(Exception):
    pass


class NoSelectionError(QuizError):
    pass


@dataclass(frozen=True)
class Question:
    prompt: str
    answer: frozenset[int]

    def __post_init__(self) -> None:
        if not self.answer:
            raise ValueError(f"Question {self.prompt!r} has no correct tile.")


def default_questions(size: int) -> list[Question]:
    """Built-in question bank for a picture cut into *size* strips."""
    if size < 2:
        raise ValueError(f"Questions need at least two tiles, got {size}.")
    half = size // 2
    questions = [
        Question("Select the leftmost strip.", frozenset({0})),
        Question("Select the rightmost strip.", frozenset({size - 1})),
        Question(
            "Select every strip in the left half of the picture.",
            frozenset(range(half)),
        ),
        Question(
            "Select every strip with an odd number.",
            frozenset(range(0, size, 2)),
        ),
    ]
    if size % 2:
        questions.append(
            Question("Select the strip in the middle.", frozenset({half}))
        )
    return questions


class Quiz:
    """Selection state and answer checking for one question."""

    def __init__(self, question: Question, size: int) -> None:
        stray = [t for t in question.answer if not 0 <= t < size]
        if stray:
            raise ValueError(
                f"Answer tiles {sorted(stray)} do not exist on a {size}-tile board."
            )
        self.question = question
        self.size = size
        self.selected: set[int] = set()
        self.attempts: int = 0
        self.correct: bool | None = None

    @classmethod
    def random(cls, size: int, rng: random.Random | None = None) -> Quiz:
        question = (rng or random).choice(default_questions(size))
        return cls(question, size)

    def toggle(self, tile: int) -> bool:
        """Select or deselect *tile*.  Returns True if it is now selected."""
        if not 0 <= tile < self.size:
            raise ValueError(f"Unknown tile {tile!r}.")
        if tile in self.selected:
            self.selected.discard(tile)
            return False
        self.selected.add(tile)
        return True

    def clear(self) -> None:
        self.selected.clear()

    def submit(self) -> bool:
        """Check the selection against the answer."""
        if not self.selected:
            raise NoSelectionError("Please select at least one tile.")
        self.attempts += 1
        self.correct = self.selected == self.question.answer
        logger.info(
            "Quiz answer %s (attempt %d): %s",
            sorted(self.selected), self.attempts,
            "correct" if self.correct else "wrong",
        )
        return self.correct
