"""Introspection functionality: slot models and the type introspector."""

from graphclone.core.introspection.core import TypeIntrospector
from graphclone.core.introspection.models import CONTENT_BASES, NATIVE_ATTRIBUTES, Slot, SlotKind

__all__ = [
    # Models
    "Slot",
    "SlotKind",
    "CONTENT_BASES",
    "NATIVE_ATTRIBUTES",
    # Core
    "TypeIntrospector",
]
