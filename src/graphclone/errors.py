"""Error taxonomy for the cloning engine.

Usage:
    try:
        engine.deep_copy(graph)
    except InstantiationError as e:
        engine.register_immutable(e.cls)
"""

from __future__ import annotations

from typing import Any


class CloneError(Exception):
    """Base class for every error raised by graphclone."""

    pass


class ConfigurationError(CloneError):
    """Raised when engine or registry configuration is invalid.

    Duplicate fast-path registrations and None arguments to configuration
    calls end up here. Never recovered internally.
    """

    pass


class InstantiationError(CloneError):
    """Raised when a type cannot be allocated without running its constructor.

    Fatal for the clone call. The type must be registered as immutable or be
    given a fast-path handler instead.
    """

    def __init__(self, cls: type, reason: str | None = None):
        self.cls = cls
        message = f"Cannot allocate {cls.__module__}.{cls.__qualname__} without construction"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CloningError(CloneError):
    """Raised when a slot of an object cannot be read or written during a copy."""

    def __init__(self, cls: type, slot: Any, reason: str | None = None):
        self.cls = cls
        self.slot = slot
        message = f"Cannot copy slot {slot!r} of {cls.__qualname__}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
