"""Exception hierarchy for the AVL quiz."""

from __future__ import annotations


class QuizError(RuntimeError):
    """Base class for quiz failures."""


class GenerationError(QuizError):
    """Raised when no non-empty tree was produced within the attempt budget."""


class QuestionTypeError(QuizError):
    """Raised when a grading call does not match the active question."""


class InvalidAnswerError(QuizError, ValueError):
    """Raised when a submitted answer cannot be interpreted.

    The round stays open so the caller can simply prompt again.
    """


__all__ = [
    "GenerationError",
    "InvalidAnswerError",
    "QuestionTypeError",
    "QuizError",
]
