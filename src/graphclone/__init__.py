"""graphclone: deep copies of arbitrary object graphs without type cooperation.

Usage:
    from graphclone import CloneEngine, immutable

    @immutable
    class Currency:
        def __init__(self, code: str):
            self.code = code

    class Account:
        def __init__(self, owner: str, currency: Currency):
            self.owner = owner
            self.currency = currency
            self.history: list[int] = []

    engine = CloneEngine()
    account = Account("ada", Currency("EUR"))
    snapshot = engine.deep_copy(account)
    assert snapshot.history is not account.history
    assert snapshot.currency is account.currency
"""

__version__ = "0.1.0"

# Configuration
from graphclone.config import CloneSettings

# Core primitives
from graphclone.core import (
    KNOWN_IMMUTABLE_BASES,
    KNOWN_IMMUTABLE_TYPES,
    Clone,
    Slot,
    SlotKind,
    Strategy,
    StrategyKind,
    TypeIntrospector,
    immutable,
    is_marked_immutable,
)

# Engine
from graphclone.engine import (
    CloneEngine,
    FieldAction,
    FieldPolicy,
    deep_copy,
    get_default_engine,
    shallow_copy,
)

# Errors
from graphclone.errors import (
    CloneError,
    CloningError,
    ConfigurationError,
    InstantiationError,
)

# Fast paths
from graphclone.fastpath import (
    DEFAULT_FAST_PATHS,
    CloneContext,
    FastPathHandler,
    FastPathRegistry,
)

# Tracking
from graphclone.tracking import IdentityCloneTracker

__all__ = [
    # Version
    "__version__",
    # Engine
    "CloneEngine",
    "get_default_engine",
    "deep_copy",
    "shallow_copy",
    "FieldAction",
    "FieldPolicy",
    "CloneSettings",
    # Core
    "Clone",
    "immutable",
    "is_marked_immutable",
    "KNOWN_IMMUTABLE_TYPES",
    "KNOWN_IMMUTABLE_BASES",
    "Slot",
    "SlotKind",
    "TypeIntrospector",
    "Strategy",
    "StrategyKind",
    # Fast paths
    "CloneContext",
    "FastPathHandler",
    "FastPathRegistry",
    "DEFAULT_FAST_PATHS",
    # Tracking
    "IdentityCloneTracker",
    # Errors
    "CloneError",
    "ConfigurationError",
    "InstantiationError",
    "CloningError",
]
