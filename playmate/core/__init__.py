"""
Core module for playmate.

This module provides the foundational components used throughout the application:
    - exceptions: Typed error taxonomy
    - config: Application settings (app-data root, Spotify credentials)
    - profile: Per-profile config.toml storage
    - logger: Console and file logging

Usage:
    from playmate.core import (
        Settings, load_settings,
        ProfileConfig, ProfileStore,
        setup_logging, get_logger,
        PlaymateError, ConfigError, SetupError
    )
"""

from playmate.core.config import Settings, load_settings
from playmate.core.exceptions import (
    AuthError,
    ConfigError,
    PlaylistError,
    PlaymateError,
    SetupError,
    SpotifyError,
)
from playmate.core.logger import get_logger, setup_logging, shutdown_logging
from playmate.core.profile import (
    DEFAULT_PROFILE,
    ProfileConfig,
    ProfileStore,
    validate_profile_name,
)

__all__ = [
    # Config
    "Settings",
    "load_settings",
    # Profile
    "DEFAULT_PROFILE",
    "ProfileConfig",
    "ProfileStore",
    "validate_profile_name",
    # Exceptions
    "PlaymateError",
    "SetupError",
    "ConfigError",
    "AuthError",
    "SpotifyError",
    "PlaylistError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
