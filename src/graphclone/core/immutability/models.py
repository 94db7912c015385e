"""Immutability markers and the catalogue of known immutable built-ins."""

from __future__ import annotations

import datetime
import decimal
import fractions
import ipaddress
import pathlib
import re
import types
import uuid
import weakref
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ImmutableMeta:
    """Marker attached to classes decorated with @immutable.

    Stored in the decorated class's own ``__dict__`` so that it is found for
    subclasses only when ``subclasses`` is set.
    """

    subclasses: bool = False
    """If True, every subclass of the marked class is immutable too."""


KNOWN_IMMUTABLE_TYPES: frozenset[type] = frozenset(
    {
        type(None),
        type(NotImplemented),
        type(Ellipsis),
        bool,
        int,
        float,
        complex,
        str,
        bytes,
        range,
        slice,
        type,
        types.FunctionType,
        types.MethodDescriptorType,
        types.WrapperDescriptorType,
        types.CodeType,
        types.FrameType,
        types.TracebackType,
        types.ModuleType,
        property,
        weakref.ref,
        re.Pattern,
        re.Match,
        decimal.Decimal,
        fractions.Fraction,
        uuid.UUID,
        datetime.date,
        datetime.datetime,
        datetime.time,
        datetime.timedelta,
        datetime.timezone,
        ipaddress.IPv4Address,
        ipaddress.IPv6Address,
        ipaddress.IPv4Network,
        ipaddress.IPv6Network,
    }
)
"""Exact types whose instances are returned as-is by every engine."""

KNOWN_IMMUTABLE_BASES: frozenset[type] = frozenset(
    {
        type,
        int,
        float,
        complex,
        str,
        bytes,
        frozenset,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        datetime.tzinfo,
        decimal.Decimal,
        fractions.Fraction,
        pathlib.PurePath,
        weakref.ref,
    }
)
"""Base types whose subclasses are returned as-is.

Subclasses of these keep their value in native storage that the generic
duplicator cannot reach, and classes (instances of ``type`` and metaclasses)
are never copied.
"""
