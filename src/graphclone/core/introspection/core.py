"""Type introspection: slot discovery and construction-free allocation.

Usage:
    introspector = TypeIntrospector()
    for slot in introspector.slots_of(Point):
        ...
    blank = introspector.allocate(Point)  # __init__ is not called
"""

from __future__ import annotations

import types
from typing import Any

from graphclone.core.introspection.models import CONTENT_BASES, NATIVE_ATTRIBUTES, Slot, SlotKind
from graphclone.errors import InstantiationError

_TRANSIENT_ATTR = "__clone_transient__"


def _has_native_new(cls: type) -> bool:
    """Check whether cls declares a natively implemented ``__new__``."""
    new = vars(cls).get("__new__")
    return isinstance(new, types.BuiltinFunctionType)


class TypeIntrospector:
    """Discovers and caches the storage layout of runtime types.

    All lookups are memoized per type for the lifetime of the introspector.
    Types are assumed not to change shape at runtime. The caches are plain
    dicts: concurrent first lookups of the same type may both compute the
    result, and the last write wins with an equal value.
    """

    def __init__(self) -> None:
        """Initialize empty caches."""
        self._slots: dict[type, tuple[Slot, ...]] = {}
        self._transient: dict[type, frozenset[str]] = {}
        self._bases: dict[type, type] = {}

    def slots_of(self, cls: type) -> tuple[Slot, ...]:
        """Get the ordered slots that make up an instance of cls.

        Walks the MRO from the most-derived class up to, but excluding,
        ``object``. Native attributes of exception bases come first, since
        writing them can reset members (setting ``__cause__`` sets
        ``__suppress_context__``). Member slots follow (each physical member
        descriptor once, in class dictionary order), then the instance dict,
        then the builtin container contents if cls derives from one.

        Args:
            cls: Runtime type to inspect.

        Returns:
            Cached tuple of slots. Repeated calls return the same tuple.
        """
        cached = self._slots.get(cls)
        if cached is not None:
            return cached

        native: list[Slot] = []
        slots: list[Slot] = []
        seen: set[int] = set()
        dict_slot: Slot | None = None
        contents_slot: Slot | None = None

        for klass in cls.__mro__:
            if klass is object:
                continue
            for name, attr in vars(klass).items():
                if isinstance(attr, types.MemberDescriptorType):
                    if id(attr) in seen:
                        continue
                    seen.add(id(attr))
                    slots.append(Slot(owner=klass, name=name, kind=SlotKind.MEMBER, descriptor=attr))
                elif (
                    name == "__dict__"
                    and dict_slot is None
                    and isinstance(attr, types.GetSetDescriptorType)
                ):
                    dict_slot = Slot(
                        owner=klass, name=name, kind=SlotKind.INSTANCE_DICT, descriptor=attr
                    )
            for name in NATIVE_ATTRIBUTES.get(klass, ()):
                native.append(
                    Slot(owner=klass, name=name, kind=SlotKind.NATIVE, descriptor=vars(klass)[name])
                )
            if contents_slot is None and klass in CONTENT_BASES:
                contents_slot = Slot(owner=klass, name="<contents>", kind=SlotKind.CONTENTS)

        if dict_slot is not None:
            slots.append(dict_slot)
        if contents_slot is not None:
            slots.append(contents_slot)

        result = (*native, *slots)
        self._slots[cls] = result
        return result

    def transient_names(self, cls: type) -> frozenset[str]:
        """Collect the field names declared transient anywhere in the MRO.

        Classes declare them with a ``__clone_transient__`` iterable of names.

        Args:
            cls: Runtime type to inspect.

        Returns:
            Union of all declared transient names (empty if none).
        """
        cached = self._transient.get(cls)
        if cached is not None:
            return cached
        names: set[str] = set()
        for klass in cls.__mro__:
            names.update(vars(klass).get(_TRANSIENT_ATTR, ()))
        result = frozenset(names)
        self._transient[cls] = result
        return result

    def allocation_base(self, cls: type) -> type:
        """Find the nearest class in the MRO with a natively implemented ``__new__``.

        Python-level ``__new__`` overrides are skipped, so allocating through
        this base never runs user construction logic.

        Args:
            cls: Runtime type to inspect.

        Returns:
            The class whose ``__new__`` allocates instances of cls.
        """
        cached = self._bases.get(cls)
        if cached is not None:
            return cached
        base = next((klass for klass in cls.__mro__ if _has_native_new(klass)), object)
        self._bases[cls] = base
        return base

    def allocate(self, cls: type) -> Any:
        """Create a blank instance of cls without running ``__new__`` or ``__init__`` overrides.

        Args:
            cls: Concrete type to instantiate.

        Returns:
            New, zero-initialized instance of cls.

        Raises:
            InstantiationError: If the native allocator refuses to create cls
                without constructor arguments.
        """
        base = self.allocation_base(cls)
        try:
            return base.__new__(cls)
        except TypeError as e:
            raise InstantiationError(cls, str(e)) from e
