"""Tests for the default container fast paths, exercised through an engine."""

import queue
from collections import OrderedDict, defaultdict, deque

from sortedcontainers import SortedDict, SortedKeyList, SortedList, SortedSet

from graphclone import CloneContext


class Item:
    """Hashable by identity, ordered only through an explicit key."""

    def __init__(self, value):
        self.value = value


class Widget:
    def __init__(self, name):
        self.name = name
        self.on_click = self.handle

    def handle(self):
        return self.name


class Bag:
    def __init__(self, *items):
        self.items = list(items)


def test_list_preserves_order_and_clones_elements(engine):
    inner = [1]
    original = [inner, "a", inner]

    clone = engine.deep_copy(original)

    assert clone == original
    assert clone[0] is not inner
    assert clone[0] is clone[2]


def test_self_containing_list(engine):
    original = []
    original.append(original)

    clone = engine.deep_copy(original)

    assert clone is not original
    assert clone[0] is clone


def test_dict_preserves_insertion_order(engine):
    original = {"z": [1], "a": [2], "m": [3]}

    clone = engine.deep_copy(original)

    assert list(clone) == ["z", "a", "m"]
    assert clone["a"] is not original["a"]


def test_self_containing_dict(engine):
    original = {}
    original["self"] = original

    clone = engine.deep_copy(original)

    assert clone["self"] is clone


def test_ordered_dict_reproduces_iteration_order(engine):
    original = OrderedDict()
    for key in (3, 1, 2):
        original[key] = [key]
    original.move_to_end(3)

    clone = engine.deep_copy(original)

    assert type(clone) is OrderedDict
    assert list(clone) == [1, 2, 3]
    clone.move_to_end(1)
    assert list(clone) == [2, 3, 1]
    assert list(original) == [1, 2, 3]


def test_defaultdict_keeps_factory(engine):
    original = defaultdict(list)
    original["a"].append(1)

    clone = engine.deep_copy(original)
    clone["b"].append(2)

    assert clone.default_factory is list
    assert clone["a"] == [1]
    assert clone["a"] is not original["a"]
    assert "b" not in original


def test_deque_keeps_maxlen(engine):
    original = deque([[1], [2], [3]], maxlen=3)

    clone = engine.deep_copy(original)
    clone.append([4])

    assert clone.maxlen == 3
    assert list(clone) == [[2], [3], [4]]
    assert list(original) == [[1], [2], [3]]


def test_set_of_objects(engine):
    first, second = Item(1), Item(2)
    original = {first, second}

    clone = engine.deep_copy(original)

    assert len(clone) == 2
    assert first not in clone
    assert sorted(item.value for item in clone) == [1, 2]


def test_frozenset_of_immutables_is_rebuilt(engine):
    original = frozenset({1, 2, "three"})

    clone = engine.deep_copy(original)

    assert clone == original
    assert clone is not original


def test_frozenset_of_objects_is_rebuilt(engine):
    item = Item(1)
    original = frozenset({item})

    clone = engine.deep_copy(original)

    assert clone is not original
    assert next(iter(clone)).value == 1
    assert item not in clone


def test_queue_gets_own_lock_and_items(engine):
    original = queue.Queue(maxsize=5)
    original.put([1])
    original.put([2])

    clone = engine.deep_copy(original)

    assert clone.maxsize == 5
    assert clone.qsize() == 2
    assert clone.mutex is not original.mutex
    assert clone.get() == [1]
    assert original.qsize() == 2


def test_priority_queue_keeps_heap_order(engine):
    original = queue.PriorityQueue()
    for priority in (5, 1, 3):
        original.put((priority, f"task-{priority}"))

    clone = engine.deep_copy(original)

    assert type(clone) is queue.PriorityQueue
    assert [clone.get()[0] for _ in range(3)] == [1, 3, 5]


def test_lifo_queue_type_is_kept(engine):
    original = queue.LifoQueue()
    original.put("a")
    original.put("b")

    clone = engine.deep_copy(original)

    assert type(clone) is queue.LifoQueue
    assert clone.get() == "b"


def test_bound_method_is_rebound_to_clone(engine):
    widget = Widget("ok")

    clone = engine.deep_copy(widget)

    assert clone.on_click.__self__ is clone
    assert clone.on_click.__func__ is widget.on_click.__func__
    assert clone.on_click() == "ok"


def test_bound_builtin_method_is_rebound_to_clone(engine):
    original = Bag([1])
    original.add = original.items.append

    clone = engine.deep_copy(original)
    clone.add(2)

    assert clone.add.__self__ is clone.items
    assert clone.items == [[1], 2]
    assert original.items == [[1]]


def test_bound_slot_wrapper_is_rebound_to_clone(engine):
    items = [1, 2]

    clone = engine.deep_copy([items, items.__len__])
    clone[0].append(3)

    assert clone[1]() == 3
    assert len(items) == 2


def test_module_builtins_are_shared(engine):
    from_keys = dict.fromkeys

    assert engine.deep_copy(len) is len
    assert engine.deep_copy(from_keys) is from_keys


def test_sorted_list_without_key(engine):
    original = SortedList([3, 1, 2])

    clone = engine.deep_copy(original)
    clone.add(0)

    assert list(clone) == [0, 1, 2, 3]
    assert list(original) == [1, 2, 3]


def test_sorted_key_list_keeps_custom_ordering(engine):
    """The clone must sort new insertions with the original's key."""
    descending = SortedKeyList([Item(1), Item(5), Item(3)], key=lambda item: -item.value)

    clone = engine.deep_copy(descending)
    clone.add(Item(4))

    assert type(clone) is SortedKeyList
    assert clone.key is descending.key
    assert [item.value for item in clone] == [5, 4, 3, 1]
    assert clone[0] is not descending[0]


def test_sorted_set_keeps_custom_ordering(engine):
    original = SortedSet([Item(2), Item(1)], key=lambda item: -item.value)

    clone = engine.deep_copy(original)
    clone.add(Item(3))

    assert [item.value for item in clone] == [3, 2, 1]
    assert len(original) == 2


def test_sorted_dict_keeps_custom_ordering(engine):
    original = SortedDict(lambda key: -key, {1: ["one"], 2: ["two"]})

    clone = engine.deep_copy(original)
    clone[3] = ["three"]

    assert list(clone) == [3, 2, 1]
    assert clone[1] == ["one"]
    assert clone[1] is not original[1]


def test_custom_fast_path(engine):
    calls = []

    def clone_bag(original: Bag, context: CloneContext) -> Bag:
        calls.append(original)
        result = Bag()
        context.memoize(original, result)
        result.items = [context.clone(item) for item in original.items]
        return result

    engine.register_fast_path(Bag, clone_bag)
    shared = [1]
    original = Bag(shared, shared)

    clone = engine.deep_copy(original)

    assert calls == [original]
    assert clone.items[0] is clone.items[1]
    assert clone.items[0] is not shared


def test_custom_fast_path_serves_shallow_copies(engine):
    def clone_bag(original, context):
        result = Bag()
        result.items = [context.clone(item) for item in original.items]
        return result

    engine.register_fast_path(Bag, clone_bag)
    shared = [1]

    clone = engine.shallow_copy(Bag(shared))

    assert clone.items[0] is shared
