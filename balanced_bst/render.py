"""Human-readable renderings of a tree for diagnostics and the CLI.

Both renderers only read ``value``, ``left`` and ``right`` from each node and
return ``"<empty>"`` for an empty tree:

* ``pretty_format`` – sideways layout with box-drawing connectors, right
  subtree above its parent and left subtree below.
* ``render_levels`` – one line per level with ``·`` marking missing children.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, List, Optional, Tuple, Union

from .node import Node
from .tree import Tree

__all__ = ["EMPTY", "pretty_format", "render_levels"]

EMPTY = "<empty>"

Renderable = Union[Tree[Any], Node[Any], None]


def _root_of(target: Renderable) -> Optional[Node[Any]]:
    if isinstance(target, Tree):
        return target.root
    return target


def pretty_format(target: Renderable) -> str:
    """Render *target* sideways, one node per line.

    >>> print(pretty_format(Tree([1, 2, 3])))
    │   ┌── 3
    └── 2
        └── 1
    """

    root = _root_of(target)
    if root is None:
        return EMPTY

    lines: List[str] = []
    # (node, prefix, is_left, expanded) frames emulate the in-order recursion
    # over right subtree, node, left subtree.
    stack: List[Tuple[Node[Any], str, bool, bool]] = [(root, "", True, False)]
    while stack:
        node, prefix, is_left, expanded = stack.pop()
        if expanded:
            connector = "└── " if is_left else "┌── "
            lines.append(f"{prefix}{connector}{node.value}")
            continue
        if node.left is not None:
            stack.append(
                (node.left, prefix + ("    " if is_left else "│   "), True, False)
            )
        stack.append((node, prefix, is_left, True))
        if node.right is not None:
            stack.append(
                (node.right, prefix + ("│   " if is_left else "    "), False, False)
            )
    return "\n".join(lines)


def render_levels(target: Renderable) -> str:
    """Render *target* level-by-level, marking missing nodes with ``·``.

    The renderer stops once the next level would contain only placeholders, so
    the output has no trailing placeholder-only rows.  Every missing slot keeps
    its position, so row width doubles per level: a skewed tree of height *h*
    renders 2 ** (h + 1) - 1 cells.  Prefer ``pretty_format`` for deep trees.
    """

    root = _root_of(target)
    if root is None:
        return EMPTY

    lines: List[str] = []
    queue: Deque[Optional[Node[Any]]] = deque([root])

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

            level_nodes.append(str(node.value))
            queue.append(node.left)
            queue.append(node.right)
            if not node.is_leaf:
                next_level_has_real_node = True

        lines.append(" ".join(level_nodes))
        if not next_level_has_real_node:
            break

    return "\n".join(lines)
