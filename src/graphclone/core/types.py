"""Core type definitions for graphclone."""

from collections.abc import Callable

type Clone[T] = T
"""Type alias indicating a value is an independent copy of its source.

When you see `Clone[T]` in a return type, the returned value shares no mutable
state with the input, except for values whose type is immutable or excluded.
"""

type Job = Callable[[], None]
"""Deferred population step pushed on a clone context's work stack."""
