"""Identity-keyed clone tracking for a single deep copy.

IdentityCloneTracker is a per-call service: created when a deep copy starts,
dropped when it returns. It is never shared between calls or threads.
"""

from __future__ import annotations

from typing import Any


class IdentityCloneTracker:
    """Maps originals to their (possibly still populating) clones by identity.

    Two distinct originals that compare equal are tracked independently, so
    the clone reproduces the identity graph and not just the value graph.
    Originals are kept alive until the tracker is discarded, which stops
    their ``id()`` from being reused by temporaries during the traversal.
    """

    def __init__(self) -> None:
        """Initialize an empty tracker."""
        self._clones: dict[int, Any] = {}
        self._originals: list[Any] = []

    def get(self, original: Any) -> Any | None:
        """Get the clone recorded for original.

        Args:
            original: Object from the source graph.

        Returns:
            The clone, or None if original has not been visited. Clones are
            never None themselves, since None is never tracked.
        """
        return self._clones.get(id(original))

    def put(self, original: Any, clone: Any) -> None:
        """Record clone as the copy of original.

        Must be called before the clone's contents are populated, so that a
        cycle back to original resolves to the partially built clone.

        Args:
            original: Object from the source graph.
            clone: Its copy.
        """
        key = id(original)
        if key not in self._clones:
            self._originals.append(original)
        self._clones[key] = clone

    def __contains__(self, original: Any) -> bool:
        return id(original) in self._clones

    def __len__(self) -> int:
        return len(self._clones)
