"""Node layout and SVG rendering for quiz trees.

``compute_layout`` assigns each node an in-order column index (``x``) and a
pixel row (``y``); ``render_svg`` turns the laid-out tree into a standalone
SVG document.  Nodes whose stored balance factor breaks the AVL invariant are
drawn red and nodes matching ``highlight_value`` amber.  The quiz core never
reads the coordinates back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import List, Optional

from .tree import TreeNode

logger = logging.getLogger(__name__)

NODE_RADIUS = 20
VERTICAL_SPACING = 70
HORIZONTAL_SPACING = 50
TOP_MARGIN = 20
MIN_WIDTH = 300
MIN_HEIGHT = 200

_EDGE_COLOUR = "#3498db"
_NODE_FILL = ("#3498db", "#2980b9")
_UNBALANCED_FILL = ("#e74c3c", "#c0392b")
_HIGHLIGHT_FILL = ("#ffc107", "#e0a800")


@dataclass(frozen=True)
class LayoutExtent:
    """Size of a laid-out tree in grid units."""

    columns: int
    max_depth: int

    @property
    def width(self) -> int:
        return max(self.columns * HORIZONTAL_SPACING + NODE_RADIUS * 2, MIN_WIDTH)

    @property
    def height(self) -> int:
        natural = (self.max_depth + 1) * VERTICAL_SPACING + NODE_RADIUS * 2 + TOP_MARGIN
        return max(natural, MIN_HEIGHT)


def compute_layout(root: Optional[TreeNode]) -> LayoutExtent:
    """Populate ``x``/``y`` on every node of *root* and return the extent."""

    column = 0
    max_depth = 0

    def place(node: Optional[TreeNode], depth: int) -> None:
        nonlocal column, max_depth
        if node is None:
            return
        max_depth = max(max_depth, depth)
        place(node.left, depth + 1)
        node.x = column
        node.y = depth * VERTICAL_SPACING + NODE_RADIUS + TOP_MARGIN
        column += 1
        place(node.right, depth + 1)

    place(root, 0)
    return LayoutExtent(columns=column, max_depth=max_depth)


def _node_colours(node: TreeNode, highlight_value: Optional[int]) -> tuple[str, str]:
    if abs(node.balance_factor) > 1:
        return _UNBALANCED_FILL
    if highlight_value is not None and node.value == highlight_value:
        return _HIGHLIGHT_FILL
    return _NODE_FILL


def render_svg(root: Optional[TreeNode], highlight_value: Optional[int] = None) -> str:
    """Lay out *root* and return it as an SVG document."""

    extent = compute_layout(root)
    width, height = extent.width, extent.height
    offset = (width - extent.columns * HORIZONTAL_SPACING) / 2 + NODE_RADIUS

    edges: List[str] = []
    shapes: List[str] = []

    def draw(node: Optional[TreeNode], parent: Optional[tuple[float, float]]) -> None:
        if node is None:
            return
        cx = node.x * HORIZONTAL_SPACING + offset
        cy = node.y
        if parent is not None:
            px, py = parent
            edges.append(
                f'<line x1="{px:g}" y1="{py + NODE_RADIUS:g}" x2="{cx:g}" '
                f'y2="{cy - NODE_RADIUS:g}" stroke="{_EDGE_COLOUR}" stroke-width="2"/>'
            )
        fill, stroke = _node_colours(node, highlight_value)
        shapes.append(
            f'<circle cx="{cx:g}" cy="{cy:g}" r="{NODE_RADIUS}" fill="{fill}" '
            f'stroke="{stroke}" stroke-width="2"/>'
        )
        shapes.append(
            f'<text x="{cx:g}" y="{cy + 5:g}" text-anchor="middle" fill="white" '
            f'font-size="12px" font-weight="bold">{escape(str(node.value))}</text>'
        )
        shapes.append(
            f'<text x="{cx + NODE_RADIUS + 5:g}" y="{cy + 5:g}" fill="#333" '
            f'font-size="10px">BF: {node.balance_factor}</text>'
        )
        draw(node.left, (cx, cy))
        draw(node.right, (cx, cy))

    draw(root, None)
    body = "\n".join(f"  {element}" for element in edges + shapes)
    header = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">'
    )
    return f"{header}\n{body}\n</svg>\n" if body else f"{header}\n</svg>\n"


def write_svg(
    root: Optional[TreeNode], output_path: Path, highlight_value: Optional[int] = None
) -> Path:
    """Render *root* and persist the SVG to ``output_path``."""

    output_path.write_text(render_svg(root, highlight_value), encoding="utf-8")
    logger.debug("Wrote tree SVG to %s", output_path)
    return output_path


__all__ = [
    "HORIZONTAL_SPACING",
    "LayoutExtent",
    "NODE_RADIUS",
    "VERTICAL_SPACING",
    "compute_layout",
    "render_svg",
    "write_svg",
]
