"""Per-call clone contexts.

A context lives for exactly one deep_copy or shallow_copy call and is the
CloneContext handed to fast-path handlers. The deep context owns the identity
tracker and an explicit work stack: generic objects and mutable containers are
allocated and memoized immediately, and their population is pushed as a job.
The stack is drained by the top-level call, so a long chain of objects is
copied in a loop instead of by recursion. Values that must be whole before
they are hashed or ordered are finished on demand by clone_complete.
"""

from __future__ import annotations

import array
from collections import OrderedDict, defaultdict, deque
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any

from graphclone.core.introspection import SlotKind
from graphclone.core.strategy import Strategy, StrategyKind
from graphclone.core.types import Job
from graphclone.engine.models import FieldAction
from graphclone.errors import CloningError
from graphclone.tracking import IdentityCloneTracker

if TYPE_CHECKING:
    from graphclone.engine.engine import CloneEngine


def _copy_list_contents(original: Any, instance: Any, context: BaseCloneContext) -> None:
    list.extend(instance, [context.clone(item) for item in list.__iter__(original)])


def _copy_dict_contents(original: Any, instance: Any, context: BaseCloneContext) -> None:
    for key, value in dict.items(original):
        dict.__setitem__(instance, context.clone_complete(key), context.clone(value))


def _copy_ordered_dict_contents(original: Any, instance: Any, context: BaseCloneContext) -> None:
    for key, value in OrderedDict.items(original):
        OrderedDict.__setitem__(instance, context.clone_complete(key), context.clone(value))


def _copy_set_contents(original: Any, instance: Any, context: BaseCloneContext) -> None:
    set.update(instance, [context.clone_complete(item) for item in set.__iter__(original)])


def _copy_deque_contents(original: Any, instance: Any, context: BaseCloneContext) -> None:
    deque.__init__(instance, (), deque.maxlen.__get__(original))
    deque.extend(instance, [context.clone(item) for item in deque.__iter__(original)])


_CONTENT_COPIERS: dict[type, Callable[[Any, Any, BaseCloneContext], None]] = {
    list: _copy_list_contents,
    dict: _copy_dict_contents,
    defaultdict: _copy_dict_contents,
    OrderedDict: _copy_ordered_dict_contents,
    set: _copy_set_contents,
    deque: _copy_deque_contents,
}


class BaseCloneContext:
    """Duplication logic shared by deep and shallow copies.

    Subclasses decide what happens to contained values (clone), whether
    identities are tracked (lookup, memoize) and when jobs run (schedule).

    Args:
        engine: Engine providing strategies, allocation and field policies.
    """

    def __init__(self, engine: CloneEngine):
        """Initialize context bound to an engine.

        Args:
            engine: Engine providing strategies, allocation and field policies.
        """
        self._engine = engine

    def clone(self, value: Any) -> Any:
        raise NotImplementedError

    def clone_complete(self, value: Any) -> Any:
        raise NotImplementedError

    def lookup(self, original: Any) -> Any | None:
        raise NotImplementedError

    def memoize(self, original: Any, clone: Any) -> None:
        raise NotImplementedError

    def schedule(self, job: Job, original: Any = None) -> None:
        raise NotImplementedError

    def duplicate(self, value: Any, strategy: Strategy) -> Any:
        """Create the copy of value according to a non-SKIP strategy.

        Args:
            value: Original object.
            strategy: Resolved strategy for type(value).

        Returns:
            The copy. Its population may still be pending on the work stack.
        """
        if strategy.kind is StrategyKind.FAST_PATH:
            assert strategy.handler is not None
            return strategy.handler(value, self)
        if strategy.kind is StrategyKind.ARRAY:
            return self._duplicate_array(value, strategy)
        instance = self._engine.introspector.allocate(type(value))
        self.memoize(value, instance)
        self.schedule(partial(self._populate, value, instance, strategy), value)
        return instance

    def _duplicate_array(self, value: Any, strategy: Strategy) -> Any:
        cls = type(value)
        if isinstance(value, tuple):
            items = [self.clone(item) for item in value]
            existing = self.lookup(value)
            if existing is not None:
                return existing
            result = tuple.__new__(cls, items)
        elif isinstance(value, array.array):
            result = array.array.__new__(cls, value.typecode, value)
        else:
            result = bytearray.__new__(cls)
            bytearray.extend(result, value)
        if strategy.slots:
            self.memoize(value, result)
            self.schedule(partial(self._populate, value, result, strategy), value)
        return result

    def _populate(self, original: Any, instance: Any, strategy: Strategy) -> None:
        """Copy every slot of original into instance."""
        transient = strategy.transient if self._engine.null_transient else frozenset()
        for slot in strategy.slots:
            if slot.kind is SlotKind.MEMBER or slot.kind is SlotKind.NATIVE:
                try:
                    value = slot.read(original)
                except AttributeError:
                    continue  # unset member stays unset
                value = self._field_value(original, slot.name, value, transient)
                try:
                    slot.write(instance, value)
                except (AttributeError, TypeError) as e:
                    raise CloningError(type(original), slot, str(e)) from e
            elif slot.kind is SlotKind.INSTANCE_DICT:
                source = slot.read(original)
                target = slot.read(instance)
                for name, value in list(source.items()):
                    target[name] = self._field_value(original, name, value, transient)
            else:
                _CONTENT_COPIERS[slot.owner](original, instance, self)

    def _field_value(self, original: Any, name: str, value: Any, transient: frozenset[str]) -> Any:
        if name in transient:
            return None
        action = self._engine.field_action(original, name)
        if action is FieldAction.NULL:
            return None
        if action is FieldAction.SAME_INSTANCE:
            return value
        return self.clone(value)


class DeepCloneContext(BaseCloneContext):
    """Context of one deep copy: tracks identities and drains a work stack.

    Args:
        engine: Engine providing strategies, allocation and field policies.
    """

    def __init__(self, engine: CloneEngine):
        """Initialize with a fresh tracker and an empty work stack.

        Args:
            engine: Engine providing strategies, allocation and field policies.
        """
        super().__init__(engine)
        self._tracker = IdentityCloneTracker()
        self._pending: list[tuple[int | None, Job]] = []
        # Jobs not yet started, by id of the original they populate.
        self._scheduled: dict[int, Job] = {}
        self._completing = 0

    def run(self, value: Any) -> Any:
        """Deep copy value and everything reachable from it."""
        result = self.clone(value)
        self._drain(0)
        return result

    def clone(self, value: Any) -> Any:
        """Clone value, possibly leaving its population on the work stack.

        Inside clone_complete, a value visited earlier whose population has
        not started yet is populated before it is returned.

        Args:
            value: Any object.

        Returns:
            value itself for SKIP types, the recorded clone if value was
            already visited, otherwise a new clone.
        """
        if value is None:
            return None
        strategy = self._engine.strategy_for(type(value))
        if strategy.kind is StrategyKind.SKIP:
            return value
        existing = self._tracker.get(value)
        if existing is not None:
            if self._completing:
                self._finish(value)
            return existing
        result = self.duplicate(value, strategy)
        if value not in self._tracker:
            self._tracker.put(value, result)
        return result

    def clone_complete(self, value: Any) -> Any:
        """Clone value and finish it, and everything it reaches, before returning.

        Only clones whose population is already running (reached through a
        cycle) can come back partially built.
        """
        mark = len(self._pending)
        self._completing += 1
        try:
            result = self.clone(value)
            self._drain(mark)
        finally:
            self._completing -= 1
        return result

    def lookup(self, original: Any) -> Any | None:
        return self._tracker.get(original)

    def memoize(self, original: Any, clone: Any) -> None:
        self._tracker.put(original, clone)

    def schedule(self, job: Job, original: Any = None) -> None:
        key = None
        if original is not None:
            key = id(original)
            self._scheduled[key] = job
        self._pending.append((key, job))

    def _finish(self, original: Any) -> None:
        """Run the not yet started population of original, and what it schedules."""
        job = self._scheduled.pop(id(original), None)
        if job is not None:
            mark = len(self._pending)
            job()
            self._drain(mark)

    def _drain(self, mark: int) -> None:
        """Run jobs until the stack is back down to mark."""
        pending = self._pending
        while len(pending) > mark:
            key, job = pending.pop()
            if key is not None and self._scheduled.pop(key, None) is None:
                continue  # already finished by clone_complete
            job()


class ShallowCloneContext(BaseCloneContext):
    """Context of one shallow copy: only the root is duplicated.

    Contained values are returned unchanged, nothing is tracked, and jobs run
    as soon as they are scheduled.
    """

    def run(self, value: Any) -> Any:
        """Shallow copy value."""
        strategy = self._engine.strategy_for(type(value))
        if strategy.kind is StrategyKind.SKIP:
            return value
        return self.duplicate(value, strategy)

    def clone(self, value: Any) -> Any:
        return value

    def clone_complete(self, value: Any) -> Any:
        return value

    def lookup(self, original: Any) -> Any | None:
        return None

    def memoize(self, original: Any, clone: Any) -> None:
        pass

    def schedule(self, job: Job, original: Any = None) -> None:
        job()
