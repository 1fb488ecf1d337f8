"""Property-based tests for the ordering and rebuilding guarantees of ``Tree``."""

from __future__ import annotations

import math
from typing import List, Tuple

from hypothesis import given, settings, strategies as st

from balanced_bst import Tree

values = st.lists(st.integers(min_value=-1000, max_value=1000), max_size=200)
operations = st.lists(
    st.tuples(st.sampled_from(["insert", "delete"]), st.integers(min_value=0, max_value=60)),
    max_size=150,
)


@given(values)
def test_inorder_equals_sorted_distinct_input(xs: List[int]) -> None:
    assert Tree(xs).inorder() == sorted(set(xs))


@given(values)
def test_built_tree_is_balanced_with_minimal_height(xs: List[int]) -> None:
    tree = Tree(xs)
    count = len(set(xs))
    assert tree.balanced()
    assert tree.height() == math.ceil(math.log2(count + 1)) - 1


@given(values)
def test_traversals_visit_every_node_once(xs: List[int]) -> None:
    tree = Tree(xs)
    distinct = sorted(set(xs))
    for traversal in (tree.level_order, tree.preorder, tree.postorder):
        assert sorted(traversal()) == distinct
    assert tree.level_order_recursive() == tree.level_order()


@settings(max_examples=200)
@given(values, operations)
def test_mutations_preserve_ordering(
    initial: List[int], ops: List[Tuple[str, int]]
) -> None:
    tree = Tree(initial)
    reference = set(initial)
    for op, value in ops:
        if op == "insert":
            tree.insert(value)
            reference.add(value)
            assert tree.find(value) is not None
        else:
            tree.delete(value)
            reference.discard(value)
            assert tree.find(value) is None
            assert tree.depth(value) == -1
        tree.validate()
    assert tree.inorder() == sorted(reference)
    assert len(tree) == len(reference)


@given(values, st.lists(st.integers(min_value=0, max_value=5000), max_size=100))
def test_rebalance_is_idempotent_and_preserves_contents(
    initial: List[int], extra: List[int]
) -> None:
    tree = Tree(initial)
    for value in extra:
        tree.insert_recursive(value)
    contents = tree.inorder()

    tree.rebalance()
    assert tree.balanced()
    assert tree.inorder() == contents

    root = tree.root
    tree.rebalance()
    assert tree.root is root
    assert tree.inorder() == contents


@given(values, st.integers(min_value=-1000, max_value=1000))
def test_duplicate_insert_leaves_tree_unchanged(xs: List[int], value: int) -> None:
    tree = Tree(xs + [value])
    before = tree.level_order()
    tree.insert(value)
    assert tree.level_order() == before
