"""Default fast-path handlers for well-known container types.

Each handler builds a fresh container of the original's exact type and fills
it through the CloneContext. Mutable containers memoize their empty clone
before populating it, so contents that point back at the container resolve to
the clone. Lists, dicts and deques defer their population to the context's
work stack, which keeps deeply nested structures off the call stack.
"""

from __future__ import annotations

import queue
import types
from collections import OrderedDict, defaultdict, deque
from collections.abc import Mapping, MutableMapping
from functools import partial
from typing import Any

from sortedcontainers import SortedDict, SortedKeyList, SortedList, SortedSet

from graphclone.fastpath.protocol import CloneContext, FastPathHandler


def _fill_sequence(original: Any, result: Any, context: CloneContext) -> None:
    result.extend([context.clone(item) for item in original])


def _fill_mapping(original: Mapping[Any, Any], result: MutableMapping[Any, Any], context: CloneContext) -> None:
    # Keys are hashed on insertion, so they must be complete.
    for key, value in original.items():
        result[context.clone_complete(key)] = context.clone(value)


def clone_list(original: list[Any], context: CloneContext) -> list[Any]:
    """Clone a list, preserving element order."""
    result: list[Any] = []
    context.memoize(original, result)
    context.schedule(partial(_fill_sequence, original, result, context), original)
    return result


def clone_dict(original: dict[Any, Any], context: CloneContext) -> dict[Any, Any]:
    """Clone a dict, preserving insertion order."""
    result: dict[Any, Any] = {}
    context.memoize(original, result)
    context.schedule(partial(_fill_mapping, original, result, context), original)
    return result


def clone_ordered_dict(original: OrderedDict[Any, Any], context: CloneContext) -> OrderedDict[Any, Any]:
    """Clone an OrderedDict, reproducing its current iteration order."""
    result: OrderedDict[Any, Any] = OrderedDict()
    context.memoize(original, result)
    context.schedule(partial(_fill_mapping, original, result, context), original)
    return result


def clone_defaultdict(original: defaultdict[Any, Any], context: CloneContext) -> defaultdict[Any, Any]:
    """Clone a defaultdict. The default factory is shared, not cloned."""
    result: defaultdict[Any, Any] = defaultdict(original.default_factory)
    context.memoize(original, result)
    context.schedule(partial(_fill_mapping, original, result, context), original)
    return result


def clone_deque(original: deque[Any], context: CloneContext) -> deque[Any]:
    """Clone a deque, keeping its maxlen."""
    result: deque[Any] = deque(maxlen=original.maxlen)
    context.memoize(original, result)
    context.schedule(partial(_fill_sequence, original, result, context), original)
    return result


def clone_set(original: set[Any], context: CloneContext) -> set[Any]:
    """Clone a set. Elements are completed before they are hashed."""
    result: set[Any] = set()
    context.memoize(original, result)
    result.update([context.clone_complete(item) for item in original])
    return result


def clone_frozenset(original: frozenset[Any], context: CloneContext) -> frozenset[Any]:
    """Clone a frozenset.

    Elements are cloned first, so a cycle through them may already have
    produced the clone.
    """
    clones = [context.clone_complete(item) for item in original]
    existing = context.lookup(original)
    if existing is not None:
        return existing
    return frozenset(clones)


def clone_queue(original: queue.Queue[Any], context: CloneContext) -> queue.Queue[Any]:
    """Clone a Queue, LifoQueue or PriorityQueue.

    A new queue is constructed with the same maxsize, so the clone gets its
    own lock and conditions. Items are copied in storage order, which keeps a
    PriorityQueue's heap valid.
    """
    with original.mutex:
        items = list(original.queue)
        unfinished = original.unfinished_tasks
    result = type(original)(original.maxsize)
    context.memoize(original, result)
    result.queue.extend([context.clone(item) for item in items])  # type: ignore[attr-defined]
    result.unfinished_tasks = unfinished
    return result


def clone_method(original: types.MethodType, context: CloneContext) -> types.MethodType:
    """Rebind a bound method's function to the clone of its instance."""
    return types.MethodType(original.__func__, context.clone(original.__self__))


def clone_builtin_method(
    original: types.BuiltinMethodType | types.MethodWrapperType, context: CloneContext
) -> Any:
    """Rebind a native method or slot wrapper, such as ``items.append``, to the clone of its instance.

    Module-level builtins and methods bound to classes or other values that
    clone to themselves are returned unchanged.
    """
    owner = original.__self__
    if owner is None or isinstance(owner, types.ModuleType):
        return original
    owner_clone = context.clone(owner)
    if owner_clone is owner:
        return original
    return getattr(owner_clone, original.__name__)


def clone_sorted_list(original: SortedList, context: CloneContext) -> SortedList:
    """Clone a SortedList or SortedKeyList, passing the original's key to the new instance."""
    key = original.key
    result = SortedList() if key is None else SortedKeyList(key=key)
    context.memoize(original, result)
    result.update([context.clone_complete(item) for item in original])
    return result


def clone_sorted_set(original: SortedSet, context: CloneContext) -> SortedSet:
    """Clone a SortedSet, passing the original's key to the new instance."""
    result = SortedSet(key=original.key)
    context.memoize(original, result)
    result.update([context.clone_complete(item) for item in original])
    return result


def clone_sorted_dict(original: SortedDict, context: CloneContext) -> SortedDict:
    """Clone a SortedDict, passing the original's key to the new instance."""
    result = SortedDict(original.key)
    context.memoize(original, result)
    for key, value in original.items():
        result[context.clone_complete(key)] = context.clone(value)
    return result


DEFAULT_FAST_PATHS: dict[type, FastPathHandler] = {
    list: clone_list,
    dict: clone_dict,
    OrderedDict: clone_ordered_dict,
    defaultdict: clone_defaultdict,
    deque: clone_deque,
    set: clone_set,
    frozenset: clone_frozenset,
    queue.Queue: clone_queue,
    queue.LifoQueue: clone_queue,
    queue.PriorityQueue: clone_queue,
    types.MethodType: clone_method,
    types.BuiltinMethodType: clone_builtin_method,
    types.MethodWrapperType: clone_builtin_method,
    SortedList: clone_sorted_list,
    SortedKeyList: clone_sorted_list,
    SortedSet: clone_sorted_set,
    SortedDict: clone_sorted_dict,
}
"""Handlers every engine registers unless register_default_fast_paths is off."""
