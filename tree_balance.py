"""Command line demonstration of AVL validation and rotation classification.

Running the module prints, for a handful of built-in trees, whether the tree
satisfies the AVL invariant, its height, the rebalancing case at the first
violating node and a level-order ASCII rendering annotated with balance
factors.  The violating node, if any, is wrapped in brackets.

The heavy lifting lives in :mod:`avl_quiz`; this script only orchestrates the
demo inputs and emits human-readable status lines.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence

from avl_quiz import RotationCase, TreeNode, build_tree, classify, render_tree, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoCase:
    """Container describing a tree example and its expected classification."""

    name: str
    nested: Sequence[Any]
    expected_valid: bool
    expected_rotation: RotationCase

    def build(self) -> Optional[TreeNode]:
        """Materialise the tree associated with this demo case."""

        return build_tree(self.nested)


def _iter_demo_cases() -> Iterator[DemoCase]:
    """Yield the built-in demonstration cases."""

    yield DemoCase("Balanced", [5, 3, 8], True, RotationCase.NONE)
    yield DemoCase("LL", [30, [20, 10, None], None], False, RotationCase.LL)
    yield DemoCase("LR", [30, [10, None, 20], None], False, RotationCase.LR)
    yield DemoCase("RR", [10, None, [20, None, 30]], False, RotationCase.RR)
    yield DemoCase("RL", [10, None, [30, 20, None]], False, RotationCase.RL)


def _format_report(case: DemoCase, tree: Optional[TreeNode]) -> List[str]:
    """Return formatted output lines for *case* and its *tree*."""

    if tree is None:
        return [f"{case.name} tree: <empty>"]

    result = validate(tree)
    rotation = classify(result.violating_node)
    if result.valid != case.expected_valid or rotation is not case.expected_rotation:
        raise RuntimeError(
            "Demo case expectation mismatch:"
            f" {case.name} expected ({case.expected_valid}, {case.expected_rotation.value})"
            f" but received ({result.valid}, {rotation.value})"
        )

    status = "Yes" if result.valid else "No"
    expected = "Yes" if case.expected_valid else "No"
    lines = [
        f"{case.name} tree valid AVL? {status} (expected: {expected})",
        f"Height: {result.height}  Rotation: {rotation.label}",
    ]
    if result.reason:
        lines.append(f"Reason: {result.reason}")

    violating = result.violating_node
    lines.append(
        render_tree(
            tree,
            show_balance=True,
            highlight_value=violating.value if violating is not None else None,
        )
    )
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the demonstration flow for all configured cases."""

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    for case in _iter_demo_cases():
        tree = case.build()
        for line in _format_report(case, tree):
            print(line)
        print()  # Spacer between cases
        logger.debug("Rendered demo case %s", case.name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
