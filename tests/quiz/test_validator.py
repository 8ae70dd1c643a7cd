from __future__ import annotations

import random
from typing import Optional

import pytest

from avl_quiz.generator import TreeGenerator
from avl_quiz.tree import TreeNode, build_tree, iter_nodes
from avl_quiz.validator import AVLValidator, calculate_height, validate


def _generated_trees(count: int = 200) -> list[TreeNode]:
    generator = TreeGenerator(rng=random.Random(1234))
    return [generator.generate_non_empty() for _ in range(count)]


def test_balanced_three_node_tree_is_valid() -> None:
    root = build_tree([5, [3, None, None, 0], [8, None, None, 0]])
    result = validate(root)
    assert result.valid is True
    assert result.height == 1
    assert result.reason is None
    assert result.violating_node is None


def test_empty_tree_has_height_minus_one() -> None:
    result = validate(None)
    assert result.valid
    assert result.height == -1
    assert calculate_height(None) == -1
    assert calculate_height(TreeNode(1)) == 0


def test_violation_reports_node_and_reason() -> None:
    root = build_tree([30, [20, 10, None], None])
    result = validate(root)
    assert not result.valid
    assert result.violating_node is root
    assert root.balance_factor == 2
    assert result.reason == (
        "Node 30 has a Balance Factor (BF) of 2 (Left Height: 1, Right Height: -1). "
        "The BF must be between -1 and 1."
    )


def test_deepest_violation_wins_and_ancestors_keep_stale_balance() -> None:
    # 40 violates (BF 2) inside the left subtree of 50, which is itself
    # left-heavy by more than one level.
    root = build_tree([50, [40, [30, 20, None], None], None])
    assert root is not None
    root.balance_factor = 7

    result = validate(root)

    assert not result.valid
    assert result.violating_node is root.left
    assert root.left.balance_factor == 2
    assert root.balance_factor == 7


def test_left_violation_is_preferred_over_right() -> None:
    root = build_tree([50, [40, [30, 20, None], None], [60, None, [70, None, 80]]])
    assert root is not None
    result = validate(root)
    assert result.violating_node is root.left
    # The right subtree is still visited and annotated.
    assert root.right.balance_factor == -2


def test_visited_nodes_are_post_order_and_unique() -> None:
    root = build_tree([1, [2, 4, 5], 3])
    validator = AVLValidator()
    validator.validate(root)
    assert [node.value for node in validator.visited] == [4, 5, 2, 3, 1]
    assert len({id(node) for node in validator.visited}) == 5


def test_visited_includes_every_node_even_when_invalid() -> None:
    root = build_tree([10, None, [20, None, [30, None, 40]]])
    visited: list[TreeNode] = []
    validate(root, visited)
    assert {id(node) for node in visited} == {id(node) for node in iter_nodes(root)}


def test_validator_resets_visited_between_calls() -> None:
    validator = AVLValidator()
    validator.validate(build_tree([1, 2, 3]))
    validator.validate(build_tree([9]))
    assert [node.value for node in validator.visited] == [9]


@pytest.mark.parametrize("tree", _generated_trees())
def test_height_matches_independent_computation(tree: TreeNode) -> None:
    result = validate(tree)
    if result.valid:
        assert result.height == calculate_height(tree)
    else:
        violating: Optional[TreeNode] = result.violating_node
        assert violating is not None
        assert result.height == calculate_height(violating)


@pytest.mark.parametrize("tree", _generated_trees())
def test_valid_trees_have_exact_balance_factors(tree: TreeNode) -> None:
    if not validate(tree).valid:
        return
    for node in iter_nodes(tree):
        assert node.balance_factor == calculate_height(node.left) - calculate_height(node.right)
        assert abs(node.balance_factor) <= 1
