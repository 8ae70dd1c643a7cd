"""Binary tree representation shared by the quiz components.

The quiz works on small, deliberately imperfect binary trees.  Node values are
display labels only: duplicates are permitted and nodes are compared by
identity, never by payload.  Besides the children every node carries a
``balance_factor`` slot written by the validator and two layout slots (``x``
and ``y``) written by the renderer.

The helpers in this module cover:

* ``TreeNode`` – a ``@dataclass`` with optional left/right children.
* ``build_tree`` – construct a tree from a nested ``[value, left, right]``
  literal, convenient for tests and demonstrations.
* ``iter_nodes`` – pre-order iteration.
* ``render_tree`` – deterministic ASCII rendering, optionally annotated with
  balance factors and a highlighted value.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Iterator, List, Optional, Sequence


@dataclass(slots=True, eq=False)
class TreeNode:
    """Node representation used for the quiz trees."""

    value: int
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None
    balance_factor: int = 0
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError("TreeNode value must be an integer")

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _check_value(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("Tree values must be integers or None")
    return value


def build_tree(nested: Optional[Sequence[Any] | int]) -> Optional[TreeNode]:
    """Build a tree from a nested ``[value, left, right]`` literal.

    ``None`` denotes an empty subtree and a bare integer is shorthand for a
    leaf.  Trailing items beyond ``right`` (such as a balance factor) are
    accepted and ignored so literals like ``[3, None, None, 0]`` work too.
    """

    if nested is None:
        return None
    if isinstance(nested, int) and not isinstance(nested, bool):
        return TreeNode(nested)
    if not isinstance(nested, Sequence) or isinstance(nested, str) or not nested:
        raise TypeError("Nested tree literals must be [value, left, right] sequences")

    value = _check_value(nested[0])
    left = build_tree(nested[1]) if len(nested) > 1 else None
    right = build_tree(nested[2]) if len(nested) > 2 else None
    return TreeNode(value, left, right)


def iter_nodes(root: Optional[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node of *root* in pre-order."""

    stack: List[TreeNode] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def _format_node(
    node: TreeNode, show_balance: bool, highlight_value: Optional[int]
) -> str:
    label = str(node.value)
    if show_balance:
        label = f"{label}({node.balance_factor:+d})" if node.balance_factor else f"{label}(0)"
    if highlight_value is not None and node.value == highlight_value:
        label = f"[{label}]"
    return label


def render_tree(
    root: Optional[TreeNode],
    *,
    show_balance: bool = False,
    highlight_value: Optional[int] = None,
) -> str:
    """Render *root* level-by-level, marking missing nodes with ``·``.

    With ``show_balance`` every node is suffixed with its stored balance
    factor, e.g. ``7(+1)``.  Nodes whose value equals ``highlight_value`` are
    wrapped in brackets.  The renderer stops once the next level is empty,
    so the output contains no trailing placeholder-only rows.
    """

    if root is None:
        return "<empty>"

    lines: List[str] = []
    queue: Deque[Optional[TreeNode]] = deque([root])

    while queue:
        level_count = len(queue)
        level_nodes: List[str] = []
        next_level_has_real_node = False
        for _ in range(level_count):
            node = queue.popleft()
            if node is None:
                level_nodes.append("·")
                queue.extend((None, None))
                continue

            level_nodes.append(_format_node(node, show_balance, highlight_value))
            queue.append(node.left)
            queue.append(node.right)
            if node.left is not None or node.right is not None:
                next_level_has_real_node = True

        lines.append(" ".join(level_nodes))
        if not next_level_has_real_node:
            break

    return "\n".join(lines)


__all__ = [
    "TreeNode",
    "build_tree",
    "iter_nodes",
    "render_tree",
]
