"""Strategy models: the cached per-type duplication decision.

Usage:
    strategy = Strategy.generic(introspector.slots_of(Point))
    if strategy.kind is StrategyKind.SKIP:
        return value
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from graphclone.core.introspection import Slot

if TYPE_CHECKING:
    from graphclone.fastpath.protocol import FastPathHandler


class StrategyKind(Enum):
    """How instances of a runtime type are duplicated."""

    SKIP = auto()
    """Return the original unchanged (immutable, excluded, enum)."""

    ARRAY = auto()
    """Element-wise or bulk copy of a tuple, array.array or bytearray."""

    FAST_PATH = auto()
    """Delegate to a registered container handler."""

    GENERIC = auto()
    """Allocate without construction and copy every slot."""


@dataclass(frozen=True, slots=True)
class Strategy:
    """Immutable duplication decision for one runtime type.

    Created once per type by the engine and cached for its lifetime.
    """

    kind: StrategyKind

    handler: FastPathHandler | None = None
    """Registered handler. Set only for FAST_PATH."""

    slots: tuple[Slot, ...] = ()
    """Slots to copy. Set for GENERIC, and for ARRAY subclasses with extra state."""

    transient: frozenset[str] = frozenset()
    """Field names to null when the engine runs with null_transient."""

    @classmethod
    def skip(cls) -> Strategy:
        """Strategy returning the original instance."""
        return _SKIP

    @classmethod
    def array(cls, slots: tuple[Slot, ...] = (), transient: frozenset[str] = frozenset()) -> Strategy:
        """Strategy copying an array-like value."""
        return cls(kind=StrategyKind.ARRAY, slots=slots, transient=transient)

    @classmethod
    def fast_path(cls, handler: FastPathHandler) -> Strategy:
        """Strategy delegating to a fast-path handler."""
        return cls(kind=StrategyKind.FAST_PATH, handler=handler)

    @classmethod
    def generic(cls, slots: tuple[Slot, ...], transient: frozenset[str] = frozenset()) -> Strategy:
        """Strategy copying a generic object slot by slot."""
        return cls(kind=StrategyKind.GENERIC, slots=slots, transient=transient)


_SKIP = Strategy(kind=StrategyKind.SKIP)
