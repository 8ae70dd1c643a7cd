"""Classification of the rebalancing case needed at a violating node."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .tree import TreeNode


class RotationCase(str, Enum):
    """AVL rebalancing cases."""

    NONE = "None"
    LL = "LL"
    LR = "LR"
    RR = "RR"
    RL = "RL"
    SIMPLE = "Simple"

    @property
    def is_single(self) -> bool:
        """``True`` for the single-rotation cases ``LL`` and ``RR``."""

        return self in (RotationCase.LL, RotationCase.RR)

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    RotationCase.NONE: "None",
    RotationCase.LL: "LL (Right Rotation)",
    RotationCase.LR: "LR (Double Rotation: Left then Right)",
    RotationCase.RR: "RR (Left Rotation)",
    RotationCase.RL: "RL (Double Rotation: Right then Left)",
    RotationCase.SIMPLE: "Simple",
}


def classify(node: Optional[TreeNode]) -> RotationCase:
    """Return the rotation case for *node* based on stored balance factors.

    The taller child's balance factor must already be up to date, which holds
    for any node reported by :func:`avl_quiz.validator.validate`.  A zero
    child balance factor resolves to the single-rotation case.
    """

    if node is None or abs(node.balance_factor) <= 1:
        return RotationCase.NONE

    left_heavy = node.balance_factor > 0
    child = node.left if left_heavy else node.right
    if child is None:
        return RotationCase.SIMPLE

    if left_heavy:
        return RotationCase.LL if child.balance_factor >= 0 else RotationCase.LR
    return RotationCase.RR if child.balance_factor <= 0 else RotationCase.RL


__all__ = ["RotationCase", "classify"]
