"""Field policy models.

Usage:
    def keep_parent(original, name):
        return FieldAction.SAME_INSTANCE if name == "parent" else None

    engine.register_field_policy(keep_parent)
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable


class FieldAction(Enum):
    """What to put in a clone's field instead of the default deep clone."""

    CLONE = auto()
    """Clone the value through the engine (default behavior)."""

    SAME_INSTANCE = auto()
    """Share the original value by reference."""

    NULL = auto()
    """Write None."""


@runtime_checkable
class FieldPolicy(Protocol):
    """Decides per field how an object's value is carried into its clone.

    Consulted for member slots and instance dict entries of generic objects.
    Returning None defers to the next registered policy, then to CLONE.
    """

    def __call__(self, original: Any, name: str) -> FieldAction | None:
        """Pick the action for one field.

        Args:
            original: Object being copied.
            name: Field name.

        Returns:
            Action to apply, or None to defer.
        """
        ...
