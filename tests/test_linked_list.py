from codekata.linked_list import LinkedList, Node, create_list, has_cycle


def test_insert_last_keeps_order():
    values = ["a", "b", "c"]
    items = LinkedList()
    for v in values:
        items.insert_last(v)
    assert list(items) == values
    assert len(items) == len(values)


def test_insert_first_reverses():
    values = [5, 6, 7, 8]
    items = LinkedList()
    for v in values:
        items.insert_first(v)
    assert list(items) == values[::-1]


def test_tail_tracks_last_after_insert_first():
    items = LinkedList()
    items.insert_first("x")
    items.insert_last("y")
    assert items.tail.value == "y"
    assert items.head.value == "x"


def test_str_format():
    assert str(LinkedList([1, 2])) == "1 -> 2 -> "
    assert str(LinkedList()) == ""


def test_create_list(capsys):
    items = create_list()
    assert sorted(items) == list(range(1, 8))
    assert capsys.readouterr().out.strip() == str(items).strip()


def test_no_cycle_in_plain_list():
    items = LinkedList(range(10))
    assert not has_cycle(items.head)
    assert not has_cycle(None)


def test_cycle_detected():
    items = LinkedList(range(6))
    items.tail.next = items.head.next.next
    assert has_cycle(items.head)


def test_self_loop_is_cycle():
    node = Node("only")
    node.next = node
    assert has_cycle(node)