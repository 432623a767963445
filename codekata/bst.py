"""Binary search tree helpers: building, walking, comparing and measuring trees."""

from collections import deque
from dataclasses import dataclass
from itertools import islice
from typing import Iterator, Optional


@dataclass(eq=False)
class Tree:
    """A binary tree node holding an integer value."""

    value: int
    left: Optional["Tree"] = None
    right: Optional["Tree"] = None

    def __str__(self):
        parts = []
        if self.left is not None:
            parts.append(str(self.left))
        parts.append(str(self.value))
        if self.right is not None:
            parts.append(str(self.right))
        return "(" + " ".join(parts) + ")"


def insert(tree, value):
    """Insert ``value`` into the search tree and return its root."""
    node = Tree(value)
    if tree is None:
        return node
    current = tree
    while True:
        if value < current.value:
            if current.left is None:
                current.left = node
                return tree
            current = current.left
        else:
            if current.right is None:
                current.right = node
                return tree
            current = current.right


def walk(tree) -> Iterator[int]:
    """Yield the values of the tree in order."""
    stack = []
    node = tree
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node.value
        node = node.right


def walk_tree(tree):
    """Return the in-order values of the tree as a list."""
    return list(walk(tree))


def is_bsts_equal(t1, t2):
    """True when both trees hold the same values in the same order."""
    return walk_tree(t1) == walk_tree(t2)


def is_bsts_equal_with_structures(t1, t2):
    """True when both trees have the same shape and the same node values."""
    stack = [(t1, t2)]
    while stack:
        a, b = stack.pop()
        if a is None and b is None:
            continue
        if a is None or b is None or a.value != b.value:
            return False
        stack.append((a.left, b.left))
        stack.append((a.right, b.right))
    return True


def search(tree, value):
    """True if ``value`` is in the search tree."""
    node = tree
    while node is not None:
        if node.value == value:
            return True
        node = node.right if node.value < value else node.left
    return False


def kth_smallest_element(tree, k):
    """Return the k-th smallest value (1-based), or -1 if there is none."""
    if k < 1:
        return -1
    return next(islice(walk(tree), k - 1, None), -1)


def is_valid_bst(tree):
    """True if every node is strictly between the bounds set by its ancestors."""
    stack = [(tree, None, None)]
    while stack:
        node, low, high = stack.pop()
        if node is None:
            continue
        if low is not None and node.value <= low:
            return False
        if high is not None and node.value >= high:
            return False
        stack.append((node.left, low, node.value))
        stack.append((node.right, node.value, high))
    return True


def _balanced_height(node):
    if node is None:
        return 0
    left = _balanced_height(node.left)
    if left is None:
        return None
    right = _balanced_height(node.right)
    if right is None or abs(left - right) > 1:
        return None
    return max(left, right) + 1


def is_balanced(root):
    """True if the heights of every node's subtrees differ by at most one."""
    return _balanced_height(root) is not None


def sum_roots_to_leaf(tree):
    """Sum the numbers formed by reading digits along each root-to-leaf path."""
    if tree is None:
        return 0
    total = 0
    stack = [(tree, 0)]
    while stack:
        node, acc = stack.pop()
        acc = acc * 10 + node.value
        if node.left is None and node.right is None:
            total += acc
            continue
        for child in (node.left, node.right):
            if child is not None:
                stack.append((child, acc))
    return total


def min_depth(root):
    """Number of nodes on the shortest path from the root to a leaf."""
    if root is None:
        return 0
    queue = deque([(root, 1)])
    while queue:
        node, depth = queue.popleft()
        if node.left is None and node.right is None:
            return depth
        for child in (node.left, node.right):
            if child is not None:
                queue.append((child, depth + 1))
    return 0


def _build(values):
    root = None
    for value in values:
        root = insert(root, value)
    return root


def create_bst():
    """Build two sample trees, print a report comparing them and return both."""
    t1 = _build([0, 1, 3, -2, 2, 5, 6, 10, 7, 8, 9])
    print(t1)
    t2 = _build([0, -1, 6, 9, 2, 10, 1, 7, 3, 5, 8])
    print(t2)

    print("Traversing Tree t1", walk_tree(t1))
    print("Traversing Tree t2", walk_tree(t2))

    print("Trees t1 and t2 are " + ("equal" if is_bsts_equal(t1, t2) else "not equal"))
    shape = "same structures" if is_bsts_equal_with_structures(t1, t2) else "different structures"
    print("The BSTs have " + shape)

    for target in (10, -2):
        if search(t1, target):
            print(f"Search successful, found {target}")
        else:
            print(f"Search not successful, not found {target}")

    for k in range(1, 11):
        print(f"{k}th SmallestElement from the BST t1 is {kth_smallest_element(t1, k)}")

    for name, tree in (("t1", t1), ("t2", t2)):
        print(f"BST {name} is valid" if is_valid_bst(tree) else f"BST {name} is not valid...")
    print("Done with Creation and Traversing the BST")
    return t1, t2


def create_test_bst():
    """Build the small sample tree 4 -> 9 -> 5, print it and return it."""
    tree = _build([4, 9, 5])
    print(tree)
    return tree