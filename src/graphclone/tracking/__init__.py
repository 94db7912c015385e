"""Per-call clone tracking."""

from graphclone.tracking.tracker import IdentityCloneTracker

__all__ = [
    "IdentityCloneTracker",
]
