"""Core functionalities: stateless protocols, models and primitives.

Architecture Note:
    core/ contains the building blocks the engine is assembled from: slot
    discovery, immutability markers and strategy models. The only state kept
    here is the introspector's memoization. For per-call and per-engine state,
    see tracking/, fastpath/, and engine/.
"""

from graphclone.core.immutability import (
    KNOWN_IMMUTABLE_BASES,
    KNOWN_IMMUTABLE_TYPES,
    ImmutableMeta,
    immutable,
    is_marked_immutable,
)
from graphclone.core.introspection import CONTENT_BASES, Slot, SlotKind, TypeIntrospector
from graphclone.core.strategy import Strategy, StrategyKind
from graphclone.core.types import Clone, Job

__all__ = [
    # Types
    "Clone",
    "Job",
    # Immutability
    "immutable",
    "is_marked_immutable",
    "ImmutableMeta",
    "KNOWN_IMMUTABLE_TYPES",
    "KNOWN_IMMUTABLE_BASES",
    # Introspection
    "Slot",
    "SlotKind",
    "CONTENT_BASES",
    "TypeIntrospector",
    # Strategy
    "Strategy",
    "StrategyKind",
]
