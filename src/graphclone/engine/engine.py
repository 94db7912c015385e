"""Clone engine: strategy resolution, configuration and the public copy API.

Usage:
    engine = CloneEngine()
    engine.register_immutable(Money)
    snapshot = engine.deep_copy(state)

    # Shallow: only the root object is duplicated
    view = engine.shallow_copy(state)
"""

from __future__ import annotations

import array
import logging
import threading
import warnings
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from graphclone.config import CloneSettings
from graphclone.core.immutability import (
    KNOWN_IMMUTABLE_BASES,
    KNOWN_IMMUTABLE_TYPES,
    is_marked_immutable,
)
from graphclone.core.introspection import SlotKind, TypeIntrospector
from graphclone.core.strategy import Strategy, StrategyKind
from graphclone.core.types import Clone
from graphclone.engine.context import DeepCloneContext, ShallowCloneContext
from graphclone.engine.models import FieldAction, FieldPolicy
from graphclone.errors import ConfigurationError
from graphclone.fastpath import DEFAULT_FAST_PATHS, FastPathHandler, FastPathRegistry

logger = logging.getLogger(__name__)

_ARRAY_TYPES = (tuple, array.array, bytearray)


class CloneEngine:
    """Deep and shallow copies of arbitrary object graphs.

    Thread-safe for concurrent copy calls: per-type caches are read without
    locks and a racing first resolution stores an equal strategy twice.
    Configuration methods are meant for setup. They are serialized among
    themselves but not against copies already running, and they never change
    a strategy that is already cached for a type.

    Args:
        settings: Engine configuration. Defaults to CloneSettings() (environment).
        immutable_predicate: Optional callable deciding whether a type is immutable.
    """

    def __init__(
        self,
        settings: CloneSettings | None = None,
        *,
        immutable_predicate: Callable[[type], bool] | None = None,
    ):
        """Initialize engine with the default immutables and fast paths.

        Args:
            settings: Engine configuration. Defaults to CloneSettings() (environment).
            immutable_predicate: Optional callable deciding whether a type is immutable.
        """
        settings = settings or CloneSettings()
        self._cloning_enabled = settings.cloning_enabled
        self._null_transient = settings.null_transient
        self._warn_late = settings.warn_on_late_configuration
        self._immutable_predicate = immutable_predicate

        self._introspector = TypeIntrospector()
        self._fast_paths = FastPathRegistry(
            DEFAULT_FAST_PATHS if settings.register_default_fast_paths else None
        )
        self._immutables: set[type] = set(KNOWN_IMMUTABLE_TYPES)
        self._excluded_bases: set[type] = set(KNOWN_IMMUTABLE_BASES)
        self._field_policies: list[FieldPolicy] = []

        self._strategies: dict[type, Strategy] = {}
        self._config_lock = threading.Lock()

    # Properties

    @property
    def introspector(self) -> TypeIntrospector:
        """Slot discovery and allocation service owned by this engine."""
        return self._introspector

    @property
    def fast_paths(self) -> FastPathRegistry:
        """Fast-path registry owned by this engine."""
        return self._fast_paths

    @property
    def cloning_enabled(self) -> bool:
        """When False, copy calls return their input unchanged."""
        return self._cloning_enabled

    @cloning_enabled.setter
    def cloning_enabled(self, enabled: bool) -> None:
        self._cloning_enabled = enabled

    @property
    def null_transient(self) -> bool:
        """When True, fields named in ``__clone_transient__`` are None in clones."""
        return self._null_transient

    @null_transient.setter
    def null_transient(self, enabled: bool) -> None:
        self._null_transient = enabled

    # Copy API

    def deep_copy[T](self, value: T) -> Clone[T]:
        """Deep copy value.

        Every mutable object reachable from value is duplicated once. Objects
        reachable through several paths, including cycles, map to a single
        clone, so the clone has the same identity graph as the original.

        Args:
            value: Root of the graph to copy.

        Returns:
            The clone. None for None, and value itself if its type is
            immutable, excluded or an enum. Tuples and frozensets are always
            rebuilt, except empty ones, which the interpreter may share.

        Raises:
            InstantiationError: If some reachable type cannot be allocated.
            CloningError: If a slot of some reachable object cannot be copied.
        """
        if value is None or not self._cloning_enabled:
            return value
        return DeepCloneContext(self).run(value)  # type: ignore[no-any-return]

    def shallow_copy[T](self, value: T) -> Clone[T]:
        """Shallow copy value.

        Only value itself is duplicated; its fields (or a container's
        elements) are shared with the original. No identity tracking is done.

        Args:
            value: Object to copy.

        Returns:
            The copy, or value itself for None and SKIP types.

        Raises:
            InstantiationError: If type(value) cannot be allocated.
        """
        if value is None or not self._cloning_enabled:
            return value
        return ShallowCloneContext(self).run(value)  # type: ignore[no-any-return]

    def copy_properties(self, src: Any, dest: Any) -> None:
        """Copy the state of src onto an existing dest, by reference.

        For objects, every member slot of src that dest's type also has is
        copied, along with all instance dict entries. For arrays, elements are
        copied by index.

        Args:
            src: Source object.
            dest: Destination object, usually a subclass instance of type(src).

        Raises:
            ValueError: If src or dest is None.
            TypeError: If src is an array and dest is not.
        """
        if src is None:
            raise ValueError("src can't be None")
        if dest is None:
            raise ValueError("dest can't be None")
        if isinstance(src, (*_ARRAY_TYPES, list)):
            if not isinstance(dest, (list, array.array, bytearray)):
                raise TypeError(f"Can't copy from array to non-array {type(dest).__qualname__}")
            for index, item in enumerate(src):
                dest[index] = item
            return

        dest_slots = self._introspector.slots_of(type(dest))
        by_descriptor = (SlotKind.NATIVE, SlotKind.MEMBER)
        dest_members = {id(s.descriptor) for s in dest_slots if s.kind in by_descriptor}
        dest_dict = next((s for s in dest_slots if s.kind is SlotKind.INSTANCE_DICT), None)
        for slot in self._introspector.slots_of(type(src)):
            if slot.kind in by_descriptor and id(slot.descriptor) in dest_members:
                try:
                    slot.write(dest, slot.read(src))
                except AttributeError:
                    continue
            elif slot.kind is SlotKind.INSTANCE_DICT and dest_dict is not None:
                dest_dict.read(dest).update(slot.read(src))

    # Strategy resolution

    def strategy_for(self, cls: type) -> Strategy:
        """Get the cached strategy for cls, resolving it on first use.

        Args:
            cls: Runtime type.

        Returns:
            Strategy used for every instance of cls for the engine's lifetime.
        """
        strategy = self._strategies.get(cls)
        if strategy is None:
            strategy = self._resolve(cls)
            self._strategies[cls] = strategy
            logger.debug("resolved %s -> %s", cls.__qualname__, strategy.kind.name)
        return strategy

    def is_resolved(self, cls: type) -> bool:
        """Check whether a strategy is already cached for cls."""
        return cls in self._strategies

    def _resolve(self, cls: type) -> Strategy:
        if issubclass(cls, (Enum, *_ENGINE_STATE_TYPES)):
            return Strategy.skip()
        if self._is_immutable(cls):
            return Strategy.skip()
        if issubclass(cls, _ARRAY_TYPES):
            if cls in _ARRAY_TYPES:
                return Strategy.array()
            return Strategy.array(
                self._introspector.slots_of(cls), self._introspector.transient_names(cls)
            )
        handler = self._fast_paths.lookup(cls)
        if handler is not None:
            return Strategy.fast_path(handler)
        if any(issubclass(cls, base) for base in self._excluded_bases):
            return Strategy.skip()
        return Strategy.generic(
            self._introspector.slots_of(cls), self._introspector.transient_names(cls)
        )

    def _is_immutable(self, cls: type) -> bool:
        if cls in self._immutables or is_marked_immutable(cls):
            return True
        return self._immutable_predicate is not None and self._immutable_predicate(cls)

    # Configuration

    def register_immutable(self, *types: type) -> None:
        """Register types whose instances are never copied.

        Must be called before the types are first copied.

        Args:
            *types: Exact types to treat as immutable.

        Raises:
            ConfigurationError: If an argument is None or not a type.
        """
        self._add_immutables(types, "register_immutable")

    def exclude(self, *types: type) -> None:
        """Exclude exact types from copying; instances are shared by reference.

        Must be called before the types are first copied.

        Args:
            *types: Exact types to exclude.

        Raises:
            ConfigurationError: If an argument is None or not a type.
        """
        self._add_immutables(types, "exclude")

    def exclude_subtypes_of(self, *types: type) -> None:
        """Exclude every subclass of the given types from copying.

        Exact types that have a fast path registered are still fast-pathed.
        Must be called before matching types are first copied.

        Args:
            *types: Base types to exclude.

        Raises:
            ConfigurationError: If an argument is None or not a type.
        """
        _check_types(types, "exclude_subtypes_of")
        with self._config_lock:
            for base in types:
                self._excluded_bases.add(base)
                late = [c for c in list(self._strategies) if issubclass(c, base)]
                for cls in late:
                    self._warn_resolved(cls, "exclude_subtypes_of", stacklevel=3)

    def register_fast_path(
        self, cls: type, handler: FastPathHandler, *, replace: bool = False
    ) -> None:
        """Register a fast-path handler for exactly cls.

        Args:
            cls: Type whose instances the handler duplicates.
            handler: Callable ``(original, context) -> clone``.
            replace: Allow replacing an existing handler.

        Raises:
            ConfigurationError: If cls already has a handler and replace is False.
        """
        with self._config_lock:
            self._fast_paths.register(cls, handler, replace=replace)
            self._warn_resolved(cls, "register_fast_path", stacklevel=3)

    def unregister_fast_path(self, cls: type) -> None:
        """Remove the fast-path handler for cls, if any.

        Args:
            cls: Type to unregister.
        """
        with self._config_lock:
            self._fast_paths.unregister(cls)
            self._warn_resolved(cls, "unregister_fast_path", stacklevel=3)

    def register_field_policy(self, policy: FieldPolicy) -> None:
        """Add a field policy. Policies are consulted in registration order.

        Args:
            policy: Callable ``(original, name) -> FieldAction | None``.

        Raises:
            ConfigurationError: If policy is not callable.
        """
        if policy is None or not callable(policy):
            raise ConfigurationError("Field policy must be callable")
        with self._config_lock:
            self._field_policies.append(policy)

    def field_action(self, original: Any, name: str) -> FieldAction:
        """Resolve the action for one field of original using the registered policies.

        Args:
            original: Object being copied.
            name: Field name.

        Returns:
            First non-None policy answer, CLONE if there is none.
        """
        for policy in self._field_policies:
            action = policy(original, name)
            if action is not None:
                return action
        return FieldAction.CLONE

    def _add_immutables(self, types: Iterable[type], operation: str) -> None:
        types = tuple(types)
        _check_types(types, operation)
        with self._config_lock:
            for cls in types:
                self._immutables.add(cls)
                self._warn_resolved(cls, operation, stacklevel=4)

    def _warn_resolved(self, cls: type, operation: str, stacklevel: int) -> None:
        strategy = self._strategies.get(cls)
        if strategy is not None and strategy.kind is not StrategyKind.SKIP and self._warn_late:
            warnings.warn(
                f"{operation}({cls.__qualname__}) has no effect on the cached "
                f"{strategy.kind.name} strategy. Configure types before copying them.",
                stacklevel=stacklevel,
            )


def _check_types(types: Iterable[Any], operation: str) -> None:
    for cls in types:
        if cls is None:
            raise ConfigurationError(f"{operation}() got None instead of a type")
        if not isinstance(cls, type):
            raise ConfigurationError(f"{operation}() expects types, got {cls!r}")


_ENGINE_STATE_TYPES: tuple[type, ...] = (CloneEngine, CloneSettings, FastPathRegistry, TypeIntrospector)


_default_engine: CloneEngine | None = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> CloneEngine:
    """Access the process-wide default engine, creating it on first use.

    Callers that need their own immutables or fast paths should construct a
    separate CloneEngine rather than configure this one.

    Returns:
        The shared CloneEngine instance.
    """
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = CloneEngine()
    return _default_engine


def deep_copy[T](value: T) -> Clone[T]:
    """Deep copy value with the default engine."""
    return get_default_engine().deep_copy(value)


def shallow_copy[T](value: T) -> Clone[T]:
    """Shallow copy value with the default engine."""
    return get_default_engine().shallow_copy(value)
