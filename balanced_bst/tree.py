"""Binary search tree that rebalances by wholesale reconstruction.

The tree stores unique, mutually ordered elements.  It is built balanced from an
arbitrary collection, accepts insertions and deletions without rotating, and
restores balance on demand by rebuilding itself from its ascending contents.

The public API covers the following capabilities:

* ``build_tree`` – balanced construction from a sorted, duplicate-free
  sequence by recursive midpoint partitioning.
* ``Tree.insert`` / ``Tree.insert_recursive`` – leaf insertion, duplicates are
  ignored.
* ``Tree.delete`` – leaf, single-child and two-children removal, the latter
  promoting the inorder successor into a freshly allocated node.
* ``Tree.find`` / ``Tree.find_recursive`` / ``Tree.depth`` – binary search.
* Level order, preorder, inorder and postorder traversals, eager (``list``) and
  lazy (generator) flavours, each accepting an optional per-node transform.
* ``Tree.height``, ``Tree.balanced`` and ``Tree.rebalance``.

Absent values, duplicate inserts and empty trees are ordinary outcomes and never
raise.  Lazy traversals and height/balance queries walk the structure with an
explicit queue or stack, so heavily skewed trees do not exhaust the interpreter's
recursion limit.
"""

from __future__ import annotations

from collections import deque
import logging
from typing import (
    Any,
    Callable,
    Deque,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
    TypeVar,
)

from .node import Node

logger = logging.getLogger(__name__)

__all__ = [
    "Tree",
    "UnorderableValueError",
    "build_tree",
    "node_height",
]

T = TypeVar("T")

Transform = Callable[[Node[Any]], Any]

# Marker for "use the tree's own root" in ``Tree.height``.
_ROOT: Any = object()
_UNBOUNDED: Any = object()


class UnorderableValueError(TypeError):
    """Raised when the initial values cannot be ordered against each other."""


def _node_value(node: Node[Any]) -> Any:
    return node.value


def _sorted_unique(values: Iterable[T]) -> List[T]:
    """Return *values* ascending with equal neighbours collapsed."""

    items = list(values)
    try:
        ordered = sorted(items)
    except TypeError as exc:
        kinds = ", ".join(sorted({type(item).__name__ for item in items}))
        raise UnorderableValueError(
            f"Tree values must be mutually comparable, received: {kinds}"
        ) from exc

    unique: List[T] = []
    for item in ordered:
        if not unique or unique[-1] != item:
            unique.append(item)
    return unique


def build_tree(sorted_values: Sequence[T]) -> Optional[Node[T]]:
    """Build a height-balanced subtree from ascending, duplicate-free values.

    The element at index ``len // 2`` becomes the root; the elements before it
    form the left subtree and the elements after it the right subtree.  An
    empty sequence yields ``None``.
    """

    def _build(start: int, stop: int) -> Optional[Node[T]]:
        if stop <= start:
            return None
        midpoint = start + (stop - start) // 2
        return Node(
            sorted_values[midpoint],
            _build(start, midpoint),
            _build(midpoint + 1, stop),
        )

    return _build(0, len(sorted_values))


def node_height(node: Optional[Node[Any]]) -> int:
    """Return the edge count of the longest downward path from *node*.

    ``None`` has height ``-1`` and a lone leaf has height ``0``.
    """

    height = -1
    level: List[Node[Any]] = [node] if node is not None else []
    while level:
        height += 1
        level = [child for current in level for child in current.children()]
    return height


def _leaf_depths(subtree: Optional[Node[Any]]) -> Set[int]:
    """Distinct depths of the leaves below a child of the root.

    Depths are counted from the root, so *subtree* itself sits at depth 1.  A
    missing subtree reports ``{0}``.
    """

    if subtree is None:
        return {0}
    depths: Set[int] = set()
    stack: List[Tuple[Node[Any], int]] = [(subtree, 1)]
    while stack:
        node, depth = stack.pop()
        if node.is_leaf:
            depths.add(depth)
            continue
        stack.extend((child, depth + 1) for child in node.children())
    return depths


class Tree(Generic[T]):
    """Binary search tree over unique, totally ordered elements."""

    __slots__ = ("_root",)

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._root: Optional[Node[T]] = build_tree(_sorted_unique(values))

    @property
    def root(self) -> Optional[Node[T]]:
        return self._root

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def _locate(
        self, value: T
    ) -> Tuple[Optional[Node[T]], Optional[Node[T]], int]:
        """Walk towards *value* returning ``(parent, node, steps)``.

        ``node`` is ``None`` when the value is absent; ``parent`` is ``None``
        when the match is the root.
        """

        parent: Optional[Node[T]] = None
        node = self._root
        steps = 0
        while node is not None and node.value != value:
            parent = node
            node = node.left if node.value > value else node.right
            steps += 1
        return parent, node, steps

    def find(self, value: T) -> Optional[Node[T]]:
        """Return the node holding *value* or ``None`` when it is absent."""

        return self._locate(value)[1]

    def find_recursive(self, value: T) -> Optional[Node[T]]:
        """Recursive counterpart of :meth:`find`."""

        def _search(node: Optional[Node[T]]) -> Optional[Node[T]]:
            if node is None or node.value == value:
                return node
            if node.value > value:
                return _search(node.left)
            return _search(node.right)

        return _search(self._root)

    def depth(self, value: T) -> int:
        """Return the number of edges from the root to *value*, or ``-1``."""

        _parent, node, steps = self._locate(value)
        return steps if node is not None else -1

    def height(self, node: Optional[Node[T]] = _ROOT) -> int:
        """Return the height of *node* (defaults to the root); ``-1`` if empty."""

        if node is _ROOT:
            node = self._root
        return node_height(node)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------
    def insert(self, value: T) -> None:
        """Attach *value* as a new leaf; already-present values are ignored."""

        if self._root is None:
            self._root = Node(value)
            return

        parent = self._root
        node: Optional[Node[T]] = self._root
        while node is not None:
            if node.value == value:
                return
            parent = node
            node = node.left if node.value > value else node.right

        if parent.value > value:
            parent.left = Node(value)
        else:
            parent.right = Node(value)

    def insert_recursive(self, value: T) -> None:
        """Recursive counterpart of :meth:`insert`."""

        def _insert(node: Optional[Node[T]]) -> Node[T]:
            if node is None:
                return Node(value)
            if node.value == value:
                return node
            if node.value > value:
                node.left = _insert(node.left)
            else:
                node.right = _insert(node.right)
            return node

        self._root = _insert(self._root)

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    def delete(self, value: T) -> None:
        """Remove *value* from the tree; absent values are ignored."""

        parent, node, _steps = self._locate(value)
        if node is None:
            return
        self._replace_child(parent, node, self._replacement_for(node))

    def _replacement_for(self, node: Node[T]) -> Optional[Node[T]]:
        """Return the subtree that takes *node*'s slot once it is removed."""

        if node.is_leaf:
            logger.debug("Deleting leaf %r", node.value)
            return None
        if node.has_one_child:
            logger.debug("Splicing out %r", node.value)
            return node.left if node.has_left else node.right

        successor = self._inorder_successor(node)
        logger.debug("Replacing %r with inorder successor %r", node.value, successor.value)
        # The successor has no left child, so this recursion ends in one of the
        # cases above.  It may rewrite node.right; read the children afterwards.
        self.delete(successor.value)
        return Node(successor.value, node.left, node.right)

    def _replace_child(
        self,
        parent: Optional[Node[T]],
        old: Node[T],
        new: Optional[Node[T]],
    ) -> None:
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    @staticmethod
    def _inorder_successor(node: Node[T]) -> Node[T]:
        """Leftmost node of *node*'s right subtree."""

        current = node.right
        if current is None:
            raise ValueError("inorder successor requires a right subtree")
        while current.left is not None:
            current = current.left
        return current

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------
    def iter_level_order(self, transform: Optional[Transform] = None) -> Iterator[Any]:
        """Lazily yield nodes breadth-first, left child before right child."""

        visit = transform or _node_value
        if self._root is None:
            return
        queue: Deque[Node[T]] = deque([self._root])
        while queue:
            node = queue.popleft()
            queue.extend(node.children())
            yield visit(node)

    def iter_preorder(self, transform: Optional[Transform] = None) -> Iterator[Any]:
        visit = transform or _node_value
        stack: List[Node[T]] = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            yield visit(node)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def iter_inorder(self, transform: Optional[Transform] = None) -> Iterator[Any]:
        """Lazily yield nodes in ascending value order."""

        visit = transform or _node_value
        stack: List[Node[T]] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield visit(current)
            current = current.right

    def iter_postorder(self, transform: Optional[Transform] = None) -> Iterator[Any]:
        visit = transform or _node_value
        stack: List[Tuple[Node[T], bool]] = (
            [(self._root, False)] if self._root is not None else []
        )
        while stack:
            node, expanded = stack.pop()
            if expanded:
                yield visit(node)
                continue
            stack.append((node, True))
            if node.right is not None:
                stack.append((node.right, False))
            if node.left is not None:
                stack.append((node.left, False))

    def level_order(self, transform: Optional[Transform] = None) -> List[Any]:
        """Return the breadth-first traversal as a list."""

        return list(self.iter_level_order(transform))

    def level_order_recursive(self, transform: Optional[Transform] = None) -> List[Any]:
        """Recursive counterpart of :meth:`level_order`, one call per level."""

        visit = transform or _node_value

        def _walk(level: List[Node[T]]) -> List[Any]:
            if not level:
                return []
            below = [child for node in level for child in node.children()]
            return [visit(node) for node in level] + _walk(below)

        return _walk([self._root] if self._root is not None else [])

    def preorder(self, transform: Optional[Transform] = None) -> List[Any]:
        return list(self.iter_preorder(transform))

    def inorder(self, transform: Optional[Transform] = None) -> List[Any]:
        return list(self.iter_inorder(transform))

    def postorder(self, transform: Optional[Transform] = None) -> List[Any]:
        return list(self.iter_postorder(transform))

    # ------------------------------------------------------------------
    # Balance
    # ------------------------------------------------------------------
    def balanced(self) -> bool:
        """Return ``True`` when the root's leaf depths spread by at most one.

        The distinct leaf depths of the left and right subtrees are merged; a
        missing subtree contributes depth ``0``.  An empty tree is balanced.
        """

        if self._root is None:
            return True
        depths = _leaf_depths(self._root.left) | _leaf_depths(self._root.right)
        return max(depths) - min(depths) <= 1

    def rebalance(self) -> None:
        """Rebuild the tree from its inorder contents unless already balanced."""

        if self.balanced():
            return
        values = self.inorder()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Rebuilding %d nodes (height %d before rebuild)",
                len(values),
                self.height(),
            )
        self._root = build_tree(values)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Raise ``AssertionError`` when ordering or tree shape is violated."""

        seen: Set[int] = set()
        stack: List[Tuple[Optional[Node[T]], Any, Any]] = [
            (self._root, _UNBOUNDED, _UNBOUNDED)
        ]
        while stack:
            node, low, high = stack.pop()
            if node is None:
                continue
            if id(node) in seen:
                raise AssertionError(f"{node!r} is reachable from more than one slot")
            seen.add(id(node))
            if low is not _UNBOUNDED and not low < node.value:
                raise AssertionError(
                    f"BST property violated: {node!r} is not greater than {low!r}"
                )
            if high is not _UNBOUNDED and not node.value < high:
                raise AssertionError(
                    f"BST property violated: {node!r} is not less than {high!r}"
                )
            stack.append((node.left, low, node.value))
            stack.append((node.right, node.value, high))

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return sum(1 for _ in self.iter_preorder())

    def __bool__(self) -> bool:
        return self._root is not None

    def __contains__(self, value: object) -> bool:
        return self.find(value) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[T]:
        return self.iter_inorder()

    def __repr__(self) -> str:
        return f"Tree({self.inorder()!r})"
