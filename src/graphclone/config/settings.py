"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the engine.

Usage:
    from graphclone.config import CloneSettings

    # Load from environment variables (GRAPHCLONE_*)
    settings = CloneSettings()

    # Or override with explicit values
    settings = CloneSettings(register_default_fast_paths=False)
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class CloneSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a CloneEngine.

    Read once when the engine is constructed. Changing a settings object
    afterwards does not reconfigure engines built from it.

    Attributes:
        cloning_enabled: When False, deep_copy and shallow_copy return their input.
        null_transient: Set fields listed in ``__clone_transient__`` to None in clones.
        register_default_fast_paths: Pre-populate the fast-path registry with the
            built-in container handlers.
        warn_on_late_configuration: Warn when a type is configured after its
            strategy was already resolved and cached.

    Environment Variables:
        GRAPHCLONE_CLONING_ENABLED
        GRAPHCLONE_NULL_TRANSIENT
        GRAPHCLONE_REGISTER_DEFAULT_FAST_PATHS
        GRAPHCLONE_WARN_ON_LATE_CONFIGURATION
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cloning_enabled: bool = True
    null_transient: bool = False
    register_default_fast_paths: bool = True
    warn_on_late_configuration: bool = True
