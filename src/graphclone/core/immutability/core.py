"""The @immutable decorator.

Usage:
    @immutable
    class Currency:
        ...

    # Subclasses are immutable too:
    @immutable(subclasses=True)
    class Money:
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import overload

from graphclone.core.immutability.models import ImmutableMeta

_MARKER = "__immutable_meta__"


@overload
def immutable(cls: type) -> type: ...


@overload
def immutable(cls: None = None, *, subclasses: bool = False) -> Callable[[type], type]: ...


def immutable(cls: type | None = None, *, subclasses: bool = False) -> type | Callable[[type], type]:
    """Mark a class as immutable so engines return its instances unchanged.

    Supports three forms:
        @immutable                      # bare decorator
        @immutable()                    # parenthesized, no args
        @immutable(subclasses=True)     # marks subclasses too

    Args:
        cls: The class to mark, or None if called with arguments.
        subclasses: If True, subclasses of the class are immutable as well.

    Returns:
        Decorated class or decorator function.

    Raises:
        TypeError: If applied to something that is not a class.
    """

    def decorator(c: type) -> type:
        if not isinstance(c, type):
            raise TypeError(f"@immutable can only decorate classes, got {c!r}")
        setattr(c, _MARKER, ImmutableMeta(subclasses=subclasses))
        return c

    if cls is None:
        return decorator
    return decorator(cls)


def is_marked_immutable(cls: type) -> bool:
    """Check whether a class carries the @immutable marker.

    The class's own marker always counts. Markers on ancestors count only if
    they were declared with ``subclasses=True``.

    Args:
        cls: Class to check.

    Returns:
        True if instances of cls must not be copied.
    """
    if _MARKER in vars(cls):
        return True
    for base in cls.__mro__[1:]:
        meta = vars(base).get(_MARKER)
        if isinstance(meta, ImmutableMeta) and meta.subclasses:
            return True
    return False
