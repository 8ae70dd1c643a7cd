"""AVL balance quiz: tree generation, validation, rotation cases and grading."""

from .config import ConfigError, GeneratorConfig, QuizConfig, load_config
from .engine import (
    GradeResult,
    Question,
    QuestionEngine,
    QuestionType,
    QuizRound,
    QuizSession,
    RoundState,
    parse_balance_factor,
)
from .errors import GenerationError, InvalidAnswerError, QuestionTypeError, QuizError
from .generator import TreeGenerator
from .layout import LayoutExtent, compute_layout, render_svg, write_svg
from .rotation import RotationCase, classify
from .tree import (
    TreeNode,
    build_tree,
    iter_nodes,
    render_tree,
)
from .validator import AVLValidator, ValidationResult, calculate_height, validate

__all__ = [
    "AVLValidator",
    "ConfigError",
    "GenerationError",
    "GeneratorConfig",
    "GradeResult",
    "InvalidAnswerError",
    "LayoutExtent",
    "Question",
    "QuestionEngine",
    "QuestionType",
    "QuestionTypeError",
    "QuizConfig",
    "QuizError",
    "QuizRound",
    "QuizSession",
    "RotationCase",
    "RoundState",
    "TreeGenerator",
    "TreeNode",
    "ValidationResult",
    "build_tree",
    "calculate_height",
    "classify",
    "compute_layout",
    "iter_nodes",
    "load_config",
    "parse_balance_factor",
    "render_svg",
    "render_tree",
    "validate",
    "write_svg",
]
