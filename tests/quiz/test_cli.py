"""Tests for the interactive terminal quiz."""

from __future__ import annotations

import io
import random
from pathlib import Path

import pytest
from rich.console import Console

from avl_quiz import cli
from avl_quiz.engine import QuestionEngine, QuestionType
from avl_quiz.errors import QuestionTypeError
from avl_quiz.generator import TreeGenerator
from avl_quiz.tree import build_tree


class _FixedGenerator(TreeGenerator):
    def __init__(self, nested) -> None:  # noqa: ANN001 - nested literal
        super().__init__(rng=random.Random(0))
        self.nested = nested

    def generate(self):  # noqa: ANN201 - mirrors TreeGenerator.generate
        return build_tree(self.nested)


class _AlwaysChoose(random.Random):
    def __init__(self, question_type: QuestionType) -> None:
        super().__init__(0)
        self.question_type = question_type

    def choice(self, seq):  # noqa: ANN001, ANN201 - mirrors random.Random
        return self.question_type if self.question_type in seq else seq[-1]


def _console() -> Console:
    return Console(file=io.StringIO(), width=120)


def test_build_rich_tree_marks_sides_and_placeholders() -> None:
    root = build_tree([30, [20, 10, None], None])
    console = _console()
    console.print(cli.build_rich_tree(root, highlight_value=20))
    output = console.file.getvalue()
    assert "30" in output
    assert "L: 20" in output
    assert "L: 10" in output
    assert "R: ·" in output
    assert "BF" not in output


def test_runner_reprompts_for_malformed_balance_factor() -> None:
    engine = QuestionEngine(
        _FixedGenerator([30, [20, 10, None], None]),
        rng=_AlwaysChoose(QuestionType.GET_BF),
    )
    console = _console()
    runner = cli.QuizRunner(engine, console, stream=io.StringIO("two\n2\n"))

    result = runner.play_round()

    output = console.file.getvalue()
    assert "Please enter a number for the Balance Factor." in output
    assert result.correct
    assert "BF: 2" in output
    assert "Score: 1" in output


def test_runner_boolean_round_uses_question_labels() -> None:
    engine = QuestionEngine(
        _FixedGenerator([30, [10, None, 20], None]),
        rng=_AlwaysChoose(QuestionType.GET_ROTATION),
    )
    console = _console()
    runner = cli.QuizRunner(engine, console, stream=io.StringIO("2\n"))

    score = runner.play(rounds=1)

    output = console.file.getvalue()
    assert "Single (LL/RR)" in output
    assert "Double (LR/RL)" in output
    assert "requires a Double Rotation." in output
    assert score == 1


def test_runner_asks_before_next_round() -> None:
    engine = QuestionEngine(
        _FixedGenerator([5, 3, 8]), rng=_AlwaysChoose(QuestionType.IS_AVL)
    )
    runner = cli.QuizRunner(engine, _console(), stream=io.StringIO("1\ny\n2\nn\n"))
    assert runner.play() == 1
    assert engine.session.rounds_played == 2
    assert engine.session.answered == 2


def test_main_runs_seeded_rounds_and_writes_svgs(tmp_path: Path) -> None:
    console = _console()
    svg_dir = tmp_path / "svgs"
    exit_code = cli.main(
        ["--rounds", "3", "--seed", "5", "--svg-dir", str(svg_dir)],
        console=console,
        stream=io.StringIO("1\n" * 10),
    )
    assert exit_code == 0
    assert sorted(path.name for path in svg_dir.iterdir()) == [
        "round-001.svg",
        "round-002.svg",
        "round-003.svg",
    ]
    assert "(3 rounds)" in console.file.getvalue()


def test_main_reports_bad_config(tmp_path: Path, caplog) -> None:  # noqa: ANN001
    config_path = tmp_path / "quiz.yaml"
    config_path.write_text("generator:\n  child_probability: 2", encoding="utf-8")
    exit_code = cli.main(["--config", str(config_path), "--rounds", "1"], console=_console())
    assert exit_code == 1
    assert "Failed to load configuration" in caplog.text


def test_main_reports_missing_config(tmp_path: Path) -> None:
    exit_code = cli.main(
        ["--config", str(tmp_path / "missing.yaml"), "--rounds", "1"], console=_console()
    )
    assert exit_code == 1


def test_main_reports_generation_failure(
    tmp_path: Path, monkeypatch, caplog  # noqa: ANN001
) -> None:
    config_path = tmp_path / "quiz.yaml"
    config_path.write_text("max_generation_attempts: 2", encoding="utf-8")
    monkeypatch.setattr(TreeGenerator, "generate", lambda self: None)

    exit_code = cli.main(["--config", str(config_path), "--rounds", "1"], console=_console())

    assert exit_code == 1
    assert "Failed to generate a quiz tree" in caplog.text


def test_main_survives_zero_stop_probabilities(tmp_path: Path) -> None:
    config_path = tmp_path / "quiz.yaml"
    config_path.write_text(
        "generator:\n  deep_stop_probability: 0.0\n  shallow_stop_probability: 0.0",
        encoding="utf-8",
    )
    console = _console()
    exit_code = cli.main(
        ["--config", str(config_path), "--rounds", "2", "--seed", "3"],
        console=console,
        stream=io.StringIO("1\n" * 4),
    )
    assert exit_code == 0
    assert "(2 rounds)" in console.file.getvalue()


def test_runner_rejects_missing_grade(monkeypatch) -> None:  # noqa: ANN001
    engine = QuestionEngine(
        _FixedGenerator([5, 3, 8]), rng=_AlwaysChoose(QuestionType.IS_AVL)
    )
    monkeypatch.setattr(engine, "grade_boolean", lambda answer: None)
    runner = cli.QuizRunner(engine, _console(), stream=io.StringIO("1\n"))

    with pytest.raises(QuestionTypeError):
        runner.play_round()
