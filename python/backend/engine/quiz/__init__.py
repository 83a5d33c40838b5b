from backend.engine.quiz.quiz import (
    NoSelectionError,
    Question,
    Quiz,
    QuizError,
    default_questions,
)

__all__ = ["NoSelectionError", "Question", "Quiz", "QuizError", "default_questions"]
