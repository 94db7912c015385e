"""Strategy functionality: the closed set of duplication decisions."""

from graphclone.core.strategy.models import Strategy, StrategyKind

__all__ = [
    "Strategy",
    "StrategyKind",
]
