"""Tests for the structural predicates of ``balanced_bst.node``."""

from __future__ import annotations

import pytest

from balanced_bst.node import Node


def test_leaf_predicates() -> None:
    leaf = Node(1)
    assert leaf.is_leaf
    assert not leaf.has_one_child
    assert not leaf.has_two_children
    assert not leaf.has_left
    assert not leaf.has_right
    assert list(leaf.children()) == []


@pytest.mark.parametrize(
    "node,has_left,has_right",
    [
        (Node(2, left=Node(1)), True, False),
        (Node(2, right=Node(3)), False, True),
    ],
)
def test_single_child_predicates(node: Node[int], has_left: bool, has_right: bool) -> None:
    assert node.has_one_child
    assert not node.is_leaf
    assert not node.has_two_children
    assert node.has_left is has_left
    assert node.has_right is has_right


def test_two_children_predicates_and_child_order() -> None:
    node = Node(2, Node(1), Node(3))
    assert node.has_two_children
    assert not node.has_one_child
    assert [child.value for child in node.children()] == [1, 3]


def test_value_is_read_only() -> None:
    node = Node(5)
    with pytest.raises(AttributeError):
        node.value = 6  # type: ignore[misc]
    assert node.value == 5


def test_repr_shows_value() -> None:
    assert repr(Node("a")) == "Node('a')"
