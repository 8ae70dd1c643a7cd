"""Interactive terminal front-end for the AVL balance quiz.

Each round draws the generated tree, asks the selected question and grades
the answer through :class:`~avl_quiz.engine.QuestionEngine`.  Boolean
questions offer two numbered choices; balance-factor questions accept an
integer and re-prompt on anything else without consuming the round.
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import IO, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.tree import Tree

from .config import ConfigError, QuizConfig, load_config
from .engine import GradeResult, QuestionEngine, QuizRound
from .errors import GenerationError, InvalidAnswerError, QuestionTypeError
from .layout import write_svg
from .tree import TreeNode

logger = logging.getLogger(__name__)


def _node_label(
    node: TreeNode, side: str, show_balance: bool, highlight_value: Optional[int]
) -> str:
    text = f"{side}{node.value}"
    if show_balance:
        text += f"  BF: {node.balance_factor}"
    if show_balance and abs(node.balance_factor) > 1:
        return f"[bold red]{text}[/]"
    if highlight_value is not None and node.value == highlight_value:
        return f"[bold yellow]{text}[/]"
    return text


def build_rich_tree(
    root: TreeNode,
    *,
    show_balance: bool = False,
    highlight_value: Optional[int] = None,
) -> Tree:
    """Convert *root* into a :class:`rich.tree.Tree` with L/R child markers."""

    def attach(branch: Tree, node: TreeNode) -> None:
        if node.is_leaf:
            return
        for side, child in (("L: ", node.left), ("R: ", node.right)):
            if child is None:
                branch.add(f"[dim]{side}·[/]")
                continue
            attach(branch.add(_node_label(child, side, show_balance, highlight_value)), child)

    tree = Tree(_node_label(root, "", show_balance, highlight_value))
    attach(tree, root)
    return tree


class QuizRunner:
    """Play quiz rounds on a rich console."""

    def __init__(
        self,
        engine: QuestionEngine,
        console: Optional[Console] = None,
        *,
        stream: Optional[IO[str]] = None,
        svg_dir: Optional[Path] = None,
    ) -> None:
        self.engine = engine
        self.console = console or Console()
        self.stream = stream
        self.svg_dir = svg_dir

    def play(self, rounds: Optional[int] = None) -> int:
        """Play ``rounds`` rounds (or until the user declines) and return the score."""

        played = 0
        while rounds is None or played < rounds:
            self.play_round()
            played += 1
            if rounds is None and not Confirm.ask(
                "Next round?", default=True, console=self.console, stream=self.stream
            ):
                break
        return self.engine.session.score

    def play_round(self) -> GradeResult:
        current = self.engine.new_round()
        question = current.question
        reveal = self.engine.config.reveal_balance_factors

        if self.svg_dir is not None:
            number = self.engine.session.rounds_played
            write_svg(
                current.tree,
                self.svg_dir / f"round-{number:03d}.svg",
                question.highlight_value,
            )

        self.console.print(
            build_rich_tree(
                current.tree,
                show_balance=reveal,
                highlight_value=question.highlight_value,
            )
        )
        self.console.print(f"[bold]{escape(question.prompt)}[/]")

        if question.expects_boolean:
            result = self._ask_boolean(current)
        else:
            result = self._ask_balance_factor()

        self.console.print(
            build_rich_tree(
                current.tree, show_balance=True, highlight_value=question.highlight_value
            )
        )
        style = "green" if result.correct else "red"
        self.console.print(Panel.fit(escape(result.explanation), border_style=style))
        self.console.print(f"Score: {self.engine.session.score}")
        return result

    @staticmethod
    def _require(result: Optional[GradeResult]) -> GradeResult:
        if result is None:
            raise QuestionTypeError("The current round has already been answered")
        return result

    def _ask_boolean(self, current: QuizRound) -> GradeResult:
        labels = current.question.choice_labels or ("Yes", "No")
        choice = Prompt.ask(
            f"\\[1] {escape(labels[0])}   \\[2] {escape(labels[1])}",
            choices=["1", "2"],
            console=self.console,
            stream=self.stream,
        )
        return self._require(self.engine.grade_boolean(choice == "1"))

    def _ask_balance_factor(self) -> GradeResult:
        while True:
            raw = Prompt.ask("Balance factor", console=self.console, stream=self.stream)
            try:
                result = self.engine.grade_balance_factor(raw)
            except InvalidAnswerError as exc:
                self.console.print(f"[yellow]{escape(str(exc))}[/]")
                continue
            return self._require(result)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Practise AVL balance factors and rotations in the terminal",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Number of rounds to play (default: ask after every round)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random generator to make a session reproducible",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional JSON or YAML file overriding generator probabilities",
    )
    parser.add_argument(
        "--svg-dir",
        type=Path,
        default=None,
        help="Directory receiving an SVG rendering of every round's tree",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    console: Optional[Console] = None,
    stream: Optional[IO[str]] = None,
) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.rounds is not None and args.rounds < 1:
        parser.error("--rounds must be a positive integer")

    try:
        config: QuizConfig = load_config(args.config)
    except (ConfigError, OSError) as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    if args.svg_dir is not None:
        args.svg_dir.mkdir(parents=True, exist_ok=True)

    engine = QuestionEngine(config=config, rng=random.Random(args.seed))
    runner = QuizRunner(engine, console, stream=stream, svg_dir=args.svg_dir)
    try:
        score = runner.play(args.rounds)
    except (KeyboardInterrupt, EOFError):
        score = engine.session.score
        runner.console.print()
    except GenerationError as exc:
        logger.error("Failed to generate a quiz tree: %s", exc)
        return 1
    runner.console.print(
        f"Final score: {score}/{engine.session.answered} "
        f"({engine.session.rounds_played} rounds)"
    )
    return 0


__all__ = ["QuizRunner", "build_rich_tree", "main"]
