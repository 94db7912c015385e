"""Configuration module using Pydantic Settings.

Provides typed engine configuration with environment variable support.

Usage:
    from graphclone.config import CloneSettings

    settings = CloneSettings(null_transient=True)
    engine = CloneEngine(settings)
"""

from graphclone.config.settings import CloneSettings

__all__ = [
    "CloneSettings",
]
