import random

import pytest

from codekata.bst import (
    Tree,
    create_bst,
    create_test_bst,
    insert,
    is_balanced,
    is_bsts_equal,
    is_bsts_equal_with_structures,
    is_valid_bst,
    kth_smallest_element,
    min_depth,
    search,
    sum_roots_to_leaf,
    walk,
    walk_tree,
)


def build(values):
    root = None
    for v in values:
        root = insert(root, v)
    return root


@pytest.fixture
def values():
    rng = random.Random(7)
    return rng.sample(range(-50, 50), 30)


def test_walk_gives_sorted_values(values):
    tree = build(values)
    assert walk_tree(tree) == sorted(values)
    assert list(walk(tree)) == sorted(values)


def test_walk_empty_tree():
    assert walk_tree(None) == []


def test_same_values_different_order_are_equal(values):
    t1 = build(values)
    t2 = build(list(reversed(values)))
    assert is_bsts_equal(t1, t2)
    assert not is_bsts_equal_with_structures(t1, t2)


def test_same_insertion_order_same_structure(values):
    assert is_bsts_equal_with_structures(build(values), build(values))


def test_structure_differs_when_one_side_missing():
    assert not is_bsts_equal_with_structures(Tree(1), None)
    assert is_bsts_equal_with_structures(None, None)


def test_search(values):
    tree = build(values)
    for v in values:
        assert search(tree, v)
    assert not search(tree, max(values) + 1)
    assert not search(None, values[0])


def test_kth_smallest(values):
    tree = build(values)
    ordered = sorted(values)
    for k in range(1, len(values) + 1):
        assert kth_smallest_element(tree, k) == ordered[k - 1]


def test_kth_smallest_out_of_range(values):
    tree = build(values)
    assert kth_smallest_element(tree, len(values) + 1) == -1
    assert kth_smallest_element(tree, 0) == -1


def test_valid_and_invalid_bst(values):
    assert is_valid_bst(build(values))
    assert is_valid_bst(None)
    assert not is_valid_bst(Tree(5, left=Tree(6)))
    assert not is_valid_bst(Tree(5, left=Tree(1, right=Tree(9))))


def test_duplicates_are_not_valid():
    tree = build([4, 4])
    assert not is_valid_bst(tree)


def test_is_balanced():
    assert is_balanced(None)
    assert is_balanced(Tree(2, Tree(1), Tree(3)))
    assert not is_balanced(create_test_bst())


def test_sorted_insertion_is_unbalanced(values):
    assert not is_balanced(build(sorted(values)))


def test_sum_roots_to_leaf_sample():
    assert sum_roots_to_leaf(create_test_bst()) == 495


def test_sum_single_node_is_its_value():
    assert sum_roots_to_leaf(Tree(7)) == 7


def test_min_depth_sample():
    assert min_depth(create_test_bst()) == 3


def test_min_depth_bounded_by_size(values):
    tree = build(values)
    assert 1 <= min_depth(tree) <= len(values)
    assert min_depth(Tree(9)) == len(walk_tree(Tree(9)))


def test_create_bst_report(capsys):
    t1, t2 = create_bst()
    out = capsys.readouterr().out
    assert is_valid_bst(t1) and is_valid_bst(t2)
    assert "Trees t1 and t2 are not equal" in out
    assert "The BSTs have different structures" in out
    assert "Search successful, found 10" in out
    assert "BST t2 is valid" in out


def test_str_lists_values_in_order(values):
    tree = build(values)
    text = str(tree).replace("(", "").replace(")", "")
    assert [int(t) for t in text.split()] == sorted(values)