"""Fast-path registry mapping exact runtime types to handlers."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from graphclone.errors import ConfigurationError
from graphclone.fastpath.protocol import FastPathHandler

logger = logging.getLogger(__name__)


class FastPathRegistry:
    """Registry of specialized duplication routines, keyed by exact type.

    Subclasses of a registered type do not match; they go through the generic
    duplicator unless registered themselves.

    Args:
        handlers: Initial handlers, e.g. DEFAULT_FAST_PATHS.
    """

    def __init__(self, handlers: Mapping[type, FastPathHandler] | None = None):
        """Initialize registry, optionally pre-populated.

        Args:
            handlers: Initial handlers, e.g. DEFAULT_FAST_PATHS.
        """
        self._handlers: dict[type, FastPathHandler] = {}
        for cls, handler in (handlers or {}).items():
            self.register(cls, handler)

    def lookup(self, cls: type) -> FastPathHandler | None:
        """Get the handler registered for exactly cls.

        Args:
            cls: Runtime type to look up.

        Returns:
            Handler if registered, None otherwise.
        """
        return self._handlers.get(cls)

    def register(self, cls: type, handler: FastPathHandler, *, replace: bool = False) -> None:
        """Register a handler for exactly cls.

        Args:
            cls: Type whose instances the handler duplicates.
            handler: Callable ``(original, context) -> clone``.
            replace: Allow replacing an existing registration.

        Raises:
            ConfigurationError: If cls or handler is invalid, or cls is already
                registered and replace is False.
        """
        if not isinstance(cls, type):
            raise ConfigurationError(f"Fast-path key must be a type, got {cls!r}")
        if handler is None or not callable(handler):
            raise ConfigurationError(f"Fast-path handler for {cls.__qualname__} must be callable")
        if cls in self._handlers and not replace:
            raise ConfigurationError(f"{cls.__qualname__} already has a fast-path handler")
        self._handlers[cls] = handler
        logger.debug("registered fast path for %s", cls.__qualname__)

    def unregister(self, cls: type) -> None:
        """Remove the handler for cls, if any.

        Args:
            cls: Type to unregister.
        """
        if self._handlers.pop(cls, None) is not None:
            logger.debug("unregistered fast path for %s", cls.__qualname__)

    def registered_types(self) -> frozenset[type]:
        """Get all types with a registered handler."""
        return frozenset(self._handlers)

    def __contains__(self, cls: object) -> bool:
        return cls in self._handlers

    def __iter__(self) -> Iterator[type]:
        return iter(list(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)
