"""Question selection and grading for the AVL quiz.

A :class:`QuestionEngine` runs one round at a time.  Starting a round
generates a tree (retrying empty ones), validates it and picks a question from
a weighted pool:

* ``IS_AVL`` is always eligible;
* ``GET_BF`` is added twice when the tree has more than one node;
* ``GET_ROTATION`` is added when the tree violates the AVL invariant.

Each round accepts exactly one answer.  Later grading calls in the same round
return ``None`` and leave the session score untouched.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from .config import QuizConfig
from .errors import InvalidAnswerError, QuestionTypeError
from .generator import TreeGenerator
from .rotation import classify
from .tree import TreeNode
from .validator import ValidationResult, validate

logger = logging.getLogger(__name__)

VALID_TREE_REASON = "All BFs are correct."


class QuestionType(str, Enum):
    """Kinds of questions the quiz can ask."""

    IS_AVL = "is_avl"
    GET_BF = "get_bf"
    GET_ROTATION = "get_rotation"


class RoundState(Enum):
    AWAITING_ANSWER = "awaiting_answer"
    ANSWERED = "answered"


@dataclass(frozen=True)
class Question:
    """A single quiz question and its expected answer."""

    type: QuestionType
    correct_answer: Union[bool, int]
    prompt: str
    target_node: Optional[TreeNode] = None
    choice_labels: Optional[Tuple[str, str]] = None
    highlight_value: Optional[int] = None

    @property
    def expects_boolean(self) -> bool:
        return self.type is not QuestionType.GET_BF


@dataclass(frozen=True)
class GradeResult:
    """Outcome of grading one answer."""

    correct: bool
    explanation: str


@dataclass
class QuizSession:
    """Running totals across rounds; the score only ever increases."""

    score: int = 0
    rounds_played: int = 0
    answered: int = 0

    def record(self, correct: bool) -> None:
        self.answered += 1
        if correct:
            self.score += 1


@dataclass
class QuizRound:
    """State owned by the current round; replaced wholesale by the next one."""

    tree: TreeNode
    validation: ValidationResult
    nodes: List[TreeNode]
    question: Question
    state: RoundState = field(default=RoundState.AWAITING_ANSWER)

    @property
    def answered(self) -> bool:
        return self.state is RoundState.ANSWERED


def parse_balance_factor(raw: Union[int, str]) -> int:
    """Interpret *raw* as an integer balance factor.

    Raises :class:`InvalidAnswerError` for anything that is not an integer or
    an integer literal such as ``"-1"`` or ``" 2 "``.
    """

    if isinstance(raw, bool):
        raise InvalidAnswerError("Please enter a number for the Balance Factor.")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise InvalidAnswerError("Please enter a number for the Balance Factor.") from exc


class QuestionEngine:
    """Drive quiz rounds: generate, validate, ask and grade."""

    def __init__(
        self,
        generator: Optional[TreeGenerator] = None,
        *,
        session: Optional[QuizSession] = None,
        config: Optional[QuizConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or QuizConfig()
        self.generator = generator or TreeGenerator(self.config.generator, rng)
        self.rng = rng or self.generator.rng
        self.session = session or QuizSession()
        self._round: Optional[QuizRound] = None

    @property
    def current_round(self) -> Optional[QuizRound]:
        return self._round

    def new_round(self) -> QuizRound:
        """Discard the current round and start a new one."""

        tree = self.generator.generate_non_empty(self.config.max_generation_attempts)
        nodes: List[TreeNode] = []
        validation = validate(tree, nodes)
        question = self.select_question(validation, nodes, tree)

        self._round = QuizRound(tree, validation, nodes, question)
        self.session.rounds_played += 1
        logger.info(
            "Round %d: %s question on %d-node tree (valid=%s)",
            self.session.rounds_played,
            question.type.value,
            len(nodes),
            validation.valid,
        )
        return self._round

    def select_question(
        self,
        validation: ValidationResult,
        nodes: Sequence[TreeNode],
        tree: TreeNode,
    ) -> Question:
        """Pick a question for *tree* from the weighted pool."""

        pool = [QuestionType.IS_AVL]
        if len(nodes) > 1:
            pool.extend((QuestionType.GET_BF, QuestionType.GET_BF))
        if not validation.valid:
            pool.append(QuestionType.GET_ROTATION)

        question_type = self.rng.choice(pool)
        if question_type is QuestionType.GET_BF:
            return self._balance_factor_question(nodes, tree)
        if question_type is QuestionType.GET_ROTATION:
            return self._rotation_question(validation)

        violating = validation.violating_node
        return Question(
            type=QuestionType.IS_AVL,
            correct_answer=validation.valid,
            prompt="Is the following structure a correctly balanced AVL Tree?",
            choice_labels=("Yes / Correct", "No / Wrong"),
            highlight_value=violating.value if violating is not None else None,
        )

    def _balance_factor_question(
        self, nodes: Sequence[TreeNode], tree: TreeNode
    ) -> Question:
        eligible = [node for node in nodes if not node.is_leaf or node is tree]
        target = self.rng.choice(eligible)
        return Question(
            type=QuestionType.GET_BF,
            correct_answer=target.balance_factor,
            prompt=f"What is the Balance Factor (BF) for the highlighted Node {target.value}?",
            target_node=target,
            highlight_value=target.value,
        )

    def _rotation_question(self, validation: ValidationResult) -> Question:
        violating = validation.violating_node
        if violating is None:
            raise QuestionTypeError("Rotation questions require a tree with a violation")
        return Question(
            type=QuestionType.GET_ROTATION,
            correct_answer=classify(violating).is_single,
            prompt=(
                f"This tree is unbalanced at Node {violating.value}. "
                "Is a single rotation (LL/RR) or a double rotation (LR/RL) required?"
            ),
            target_node=violating,
            choice_labels=("Single (LL/RR)", "Double (LR/RL)"),
            highlight_value=violating.value,
        )

    def _active_round(self, *allowed: QuestionType) -> QuizRound:
        current = self._round
        if current is None:
            raise QuestionTypeError("No active round; call new_round() first")
        if current.question.type not in allowed:
            raise QuestionTypeError(
                f"Cannot grade this answer for a {current.question.type.value} question"
            )
        return current

    def _finish(self, current: QuizRound, correct: bool) -> None:
        current.state = RoundState.ANSWERED
        self.session.record(correct)
        logger.info(
            "Answer graded %s; score %d/%d",
            "correct" if correct else "wrong",
            self.session.score,
            self.session.answered,
        )

    def grade_boolean(self, answer: bool) -> Optional[GradeResult]:
        """Grade a yes/no or single/double answer; ``None`` if already answered."""

        current = self._active_round(QuestionType.IS_AVL, QuestionType.GET_ROTATION)
        if current.answered:
            logger.debug("Ignoring repeated answer for the current round")
            return None

        correct = answer == current.question.correct_answer
        self._finish(current, correct)
        if current.question.type is QuestionType.IS_AVL:
            explanation = self._explain_validity(current.validation, correct)
        else:
            explanation = self._explain_rotation(current, correct)
        return GradeResult(correct, explanation)

    def grade_balance_factor(self, raw: Union[int, str]) -> Optional[GradeResult]:
        """Grade a balance-factor answer; ``None`` if already answered.

        Unparseable input raises :class:`InvalidAnswerError` and leaves the
        round open.
        """

        current = self._active_round(QuestionType.GET_BF)
        if current.answered:
            logger.debug("Ignoring repeated answer for the current round")
            return None

        answer = parse_balance_factor(raw)
        expected = current.question.correct_answer
        correct = answer == expected
        self._finish(current, correct)

        target = current.question.target_node
        value = target.value if target is not None else "?"
        if correct:
            explanation = f"Correct! The BF for Node {value} is indeed {expected}."
        else:
            explanation = (
                f"Wrong! The BF for Node {value} is {expected}. "
                f"(You calculated: {answer})."
            )
        return GradeResult(correct, explanation)

    @staticmethod
    def _explain_validity(validation: ValidationResult, correct: bool) -> str:
        reason = validation.reason or VALID_TREE_REASON
        if correct:
            verdict = "The tree is valid." if validation.valid else "The tree is invalid."
            return f"Correct! {verdict} Reason: {reason}"
        expected = "Yes, it is AVL." if validation.valid else "No, it is unbalanced."
        return f"Wrong! The correct answer was {expected} Reason: {reason}"

    @staticmethod
    def _explain_rotation(current: QuizRound, correct: bool) -> str:
        case = classify(current.validation.violating_node)
        kind = "Single Rotation" if current.question.correct_answer else "Double Rotation"
        if correct:
            return f"Correct! The imbalance ({case.label}) requires a {kind}."
        return f"Wrong! The imbalance ({case.label}) actually requires a {kind}."


__all__ = [
    "GradeResult",
    "Question",
    "QuestionEngine",
    "QuestionType",
    "QuizRound",
    "QuizSession",
    "RoundState",
    "VALID_TREE_REASON",
    "parse_balance_factor",
]
