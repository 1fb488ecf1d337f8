"""Node representation for the rebuilding binary search tree.

A ``Node`` holds a single ordered element and two child slots.  The element is
fixed for the lifetime of the node; structural edits replace whole nodes rather
than rewriting values, which keeps every child slot an exclusive owner of its
subtree.
"""

from __future__ import annotations

from typing import Generic, Iterator, Optional, TypeVar

__all__ = ["Node"]

T = TypeVar("T")


class Node(Generic[T]):
    """Element holder with optional ``left`` and ``right`` children."""

    __slots__ = ("_value", "left", "right")

    def __init__(
        self,
        value: T,
        left: Optional["Node[T]"] = None,
        right: Optional["Node[T]"] = None,
    ) -> None:
        self._value = value
        self.left = left
        self.right = right

    @property
    def value(self) -> T:
        """The stored element (read-only)."""

        return self._value

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def has_two_children(self) -> bool:
        return self.left is not None and self.right is not None

    @property
    def has_one_child(self) -> bool:
        return not (self.is_leaf or self.has_two_children)

    @property
    def has_left(self) -> bool:
        return self.left is not None

    @property
    def has_right(self) -> bool:
        return self.right is not None

    def children(self) -> Iterator["Node[T]"]:
        """Yield the present children, left before right."""

        if self.left is not None:
            yield self.left
        if self.right is not None:
            yield self.right

    def __repr__(self) -> str:
        return f"Node({self._value!r})"
