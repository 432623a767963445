"""A singly linked list with head and tail insertion and cycle detection."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(eq=False)
class Node:
    """One list cell."""

    value: Any
    next: Optional["Node"] = None


class LinkedList:
    """Singly linked list keeping references to both ends."""

    def __init__(self, values=()):
        self.head = None
        self.tail = None
        self._size = 0
        for value in values:
            self.insert_last(value)

    def insert_first(self, value):
        node = Node(value, self.head)
        self.head = node
        if self.tail is None:
            self.tail = node
        self._size += 1

    def insert_last(self, value):
        node = Node(value)
        if self.tail is None:
            self.head = node
        else:
            self.tail.next = node
        self.tail = node
        self._size += 1

    def __iter__(self):
        node = self.head
        while node is not None:
            yield node.value
            node = node.next

    def __len__(self):
        return self._size

    def __str__(self):
        return "".join(f"{value} -> " for value in self)


def has_cycle(head):
    """True if following ``next`` links from ``head`` never ends."""
    slow = fast = head
    while fast is not None and fast.next is not None:
        slow = slow.next
        fast = fast.next.next
        if slow is fast:
            return True
    return False


def create_list():
    """Build the sample list with a mix of head and tail inserts, print and return it."""
    items = LinkedList()
    items.insert_first(1)
    items.insert_last(2)
    items.insert_first(3)
    items.insert_last(4)
    items.insert_first(5)
    items.insert_first(6)
    items.insert_last(7)
    print(items)
    return items