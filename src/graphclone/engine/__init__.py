"""Clone engine: per-call contexts, field policies, and the public API."""

from graphclone.engine.context import BaseCloneContext, DeepCloneContext, ShallowCloneContext
from graphclone.engine.engine import CloneEngine, deep_copy, get_default_engine, shallow_copy
from graphclone.engine.models import FieldAction, FieldPolicy

__all__ = [
    # Engine
    "CloneEngine",
    "get_default_engine",
    "deep_copy",
    "shallow_copy",
    # Contexts
    "BaseCloneContext",
    "DeepCloneContext",
    "ShallowCloneContext",
    # Policies
    "FieldAction",
    "FieldPolicy",
]
