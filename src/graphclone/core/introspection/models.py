"""Slot models describing the instance-level storage of a type.

Usage:
    slot = Slot(owner=Point, name="x", kind=SlotKind.MEMBER, descriptor=Point.__dict__["x"])
    value = slot.read(point)
"""

from __future__ import annotations

from collections import OrderedDict, defaultdict, deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class SlotKind(Enum):
    """Kind of storage location a Slot describes."""

    NATIVE = auto()
    """Writable native attribute (exception state), accessed through its getset descriptor."""

    MEMBER = auto()
    """A ``__slots__`` member, accessed through its member descriptor."""

    INSTANCE_DICT = auto()
    """The instance ``__dict__``, copied entry by entry."""

    CONTENTS = auto()
    """Hidden payload of a builtin container base (list, dict, set, deque)."""


NATIVE_ATTRIBUTES: dict[type, tuple[str, ...]] = {
    BaseException: ("args", "__cause__", "__context__", "__traceback__"),
}
"""Getset-backed state of native base types that lives outside any member or dict.

The traceback is shared by reference, since tracebacks and frames are never copied.
"""

CONTENT_BASES: tuple[type, ...] = (OrderedDict, defaultdict, dict, list, set, deque)
"""Builtin container types whose subclass instances carry a CONTENTS slot.

Searched in MRO order, so the most specific base wins.
"""


@dataclass(frozen=True, slots=True)
class Slot:
    """One instance-level storage location of a type or one of its ancestors.

    Accessor and mutator go straight through the descriptor, bypassing any
    ``__getattribute__`` or ``__setattr__`` override on the class.
    """

    owner: type
    """Class in the MRO that declares the slot."""

    name: str
    """Attribute name (mangled for private members)."""

    kind: SlotKind

    descriptor: Any = None
    """Member, native getset or ``__dict__`` descriptor. None for CONTENTS slots."""

    def read(self, instance: Any) -> Any:
        """Read the slot value from instance.

        Raises:
            AttributeError: If a member slot is unset on instance.
        """
        return self.descriptor.__get__(instance, self.owner)

    def write(self, instance: Any, value: Any) -> None:
        """Write value into the slot of instance."""
        self.descriptor.__set__(instance, value)

    def __repr__(self) -> str:
        return f"Slot({self.owner.__qualname__}.{self.name}, {self.kind.name})"
