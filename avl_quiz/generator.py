"""Randomised tree generation with deliberate imbalance injection.

Trees are kept shallow by depth-dependent stop probabilities.  At any non-root
node the generator may collapse one side and extend the other, which yields a
steady supply of trees that violate the AVL invariant without needing a
separate code path for invalid trees.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .config import GeneratorConfig
from .errors import GenerationError
from .tree import TreeNode, iter_nodes

logger = logging.getLogger(__name__)


class TreeGenerator:
    """Produce random binary trees according to a :class:`GeneratorConfig`."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random()

    def generate(self) -> Optional[TreeNode]:
        """Return a freshly generated tree, which may be empty (``None``)."""

        root = self._grow(0)
        if root is not None:
            logger.debug("Generated tree with %d nodes", sum(1 for _ in iter_nodes(root)))
        return root

    def generate_non_empty(self, max_attempts: Optional[int] = None) -> TreeNode:
        """Retry :meth:`generate` until it yields a tree.

        With ``max_attempts`` set, :class:`GenerationError` is raised once the
        budget is exhausted; otherwise the call retries indefinitely.
        """

        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            tree = self.generate()
            if tree is not None:
                if attempts > 1:
                    logger.debug("Empty tree generated; succeeded after %d attempts", attempts)
                return tree
        raise GenerationError(f"No non-empty tree generated after {attempts} attempts")

    def _chance(self, probability: float) -> bool:
        return self.rng.random() < probability

    def _grow(self, depth: int) -> Optional[TreeNode]:
        cfg = self.config
        if depth > cfg.max_depth:
            return None
        if depth > cfg.deep_depth and self._chance(cfg.deep_stop_probability):
            return None
        if depth > cfg.shallow_depth and self._chance(cfg.shallow_stop_probability):
            return None

        value = self.rng.randint(cfg.value_min, cfg.value_max)
        child_probability = cfg.root_child_probability if depth == 0 else cfg.child_probability

        left = self._grow(depth + 1) if self._chance(child_probability) else None
        right = self._grow(depth + 1) if self._chance(child_probability) else None
        node = TreeNode(value, left, right)

        if depth > 0 and self._chance(cfg.imbalance_probability):
            if self._chance(cfg.left_heavy_probability):
                self._make_left_heavy(node, depth)
            else:
                self._make_right_heavy(node, depth)
        return node

    def _make_left_heavy(self, node: TreeNode, depth: int) -> None:
        node.right = None
        if node.left is not None:
            if self._chance(self.config.extension_probability):
                node.left.left = self._grow(depth + 2)
        else:
            node.left = self._grow(depth + 1)
            if node.left is not None:
                node.left.left = self._grow(depth + 2)

    def _make_right_heavy(self, node: TreeNode, depth: int) -> None:
        node.left = None
        if node.right is not None:
            if self._chance(self.config.extension_probability):
                node.right.right = self._grow(depth + 2)
        else:
            node.right = self._grow(depth + 1)
            if node.right is not None:
                node.right.right = self._grow(depth + 2)


__all__ = ["TreeGenerator"]
