"""Immutability functionality: markers, decorator, and known immutable types."""

from graphclone.core.immutability.core import immutable, is_marked_immutable
from graphclone.core.immutability.models import (
    KNOWN_IMMUTABLE_BASES,
    KNOWN_IMMUTABLE_TYPES,
    ImmutableMeta,
)

__all__ = [
    # Models
    "ImmutableMeta",
    "KNOWN_IMMUTABLE_TYPES",
    "KNOWN_IMMUTABLE_BASES",
    # Core
    "immutable",
    "is_marked_immutable",
]
