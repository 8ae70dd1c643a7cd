"""AVL invariant validation.

``validate`` walks a tree in post-order and has two effects:

1. it returns a :class:`ValidationResult` describing the first violation
   found (children are checked before their parent, and the left subtree
   before the right one);
2. it stores ``height(left) - height(right)`` in ``balance_factor`` on every
   node whose children were both valid, and appends every node it visits to
   the optional ``visited`` list.

Once a subtree reports a violation its result is propagated unchanged, so
ancestors of the violating node keep their previous balance factor.  Callers
must not assume fresh balance factors on invalid trees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .tree import TreeNode

logger = logging.getLogger(__name__)

EMPTY_HEIGHT = -1


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a (sub)tree."""

    valid: bool
    height: int
    reason: Optional[str] = None
    violating_node: Optional[TreeNode] = None


_EMPTY_RESULT = ValidationResult(valid=True, height=EMPTY_HEIGHT)


def calculate_height(node: Optional[TreeNode]) -> int:
    """Return the height of *node*, where an empty tree has height -1."""

    if node is None:
        return EMPTY_HEIGHT
    return 1 + max(calculate_height(node.left), calculate_height(node.right))


def _describe_violation(node: TreeNode, left_height: int, right_height: int) -> str:
    return (
        f"Node {node.value} has a Balance Factor (BF) of {node.balance_factor} "
        f"(Left Height: {left_height}, Right Height: {right_height}). "
        "The BF must be between -1 and 1."
    )


def validate(
    root: Optional[TreeNode], visited: Optional[List[TreeNode]] = None
) -> ValidationResult:
    """Validate *root* against the AVL invariant, annotating balance factors."""

    if root is None:
        return _EMPTY_RESULT

    left_result = validate(root.left, visited)
    right_result = validate(root.right, visited)
    if visited is not None:
        visited.append(root)

    if not left_result.valid:
        return left_result
    if not right_result.valid:
        return right_result

    root.balance_factor = left_result.height - right_result.height
    height = 1 + max(left_result.height, right_result.height)
    if abs(root.balance_factor) <= 1:
        return ValidationResult(valid=True, height=height)

    logger.debug(
        "AVL violation at node %s (BF=%d)", root.value, root.balance_factor
    )
    return ValidationResult(
        valid=False,
        height=height,
        reason=_describe_violation(root, left_result.height, right_result.height),
        violating_node=root,
    )


class AVLValidator:
    """Stateful wrapper around :func:`validate` remembering the visited nodes."""

    def __init__(self) -> None:
        self.visited: List[TreeNode] = []

    def validate(self, root: Optional[TreeNode]) -> ValidationResult:
        self.visited = []
        return validate(root, self.visited)


__all__ = [
    "AVLValidator",
    "EMPTY_HEIGHT",
    "ValidationResult",
    "calculate_height",
    "validate",
]
