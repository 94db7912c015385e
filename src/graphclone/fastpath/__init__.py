"""Fast-path duplication: handler protocols, registry, and default handlers."""

from graphclone.fastpath.handlers import DEFAULT_FAST_PATHS
from graphclone.fastpath.protocol import CloneContext, FastPathHandler
from graphclone.fastpath.registry import FastPathRegistry

__all__ = [
    "CloneContext",
    "FastPathHandler",
    "FastPathRegistry",
    "DEFAULT_FAST_PATHS",
]
