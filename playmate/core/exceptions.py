"""
Exception classes for playmate.

Every failure the program can hit while running unattended is fatal, but
each kind gets its own class so the CLI (and tests) can tell them apart
instead of relying on process termination.

Exception Hierarchy:
    PlaymateError (base)
        SetupError - Missing app-data directory, unwritable profile files
        ConfigError - Malformed config.toml, bad profile name, missing credentials
        AuthError - Token cache or OAuth exchange failures
        SpotifyError - Spotify Web API failures
        PlaylistError - No playlist can be selected

Two situations are deliberately NOT exceptions:
    - Invalid input at the playlist menu is handled by re-prompting.
    - "Nothing playing" and "local file playing" are MoveResult values.
"""


class PlaymateError(Exception):
    """
    Base exception for all playmate errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (paths, ids,
                 the original error string).
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class SetupError(PlaymateError):
    """
    Raised when the local environment cannot host playmate's state.

    Common causes:
        - Neither --app-data-dir nor APPDATA is set
        - The profile directory or config file cannot be created
        - The config file cannot be read or written
    """
    pass


class ConfigError(PlaymateError):
    """
    Raised when persisted or supplied configuration is invalid.

    There is no partial recovery: a config.toml that does not parse is
    an unrecoverable startup error, and the user has to fix or delete it.

    Example:
        raise ConfigError(
            "Invalid TOML in config file: Expected '=' after a key",
            details={'file_path': '/path/to/config.toml'}
        )
    """
    pass


class AuthError(PlaymateError):
    """
    Raised when a usable access credential cannot be obtained.

    Common causes:
        - token_cache.json is corrupted or missing required keys
        - The refresh token was revoked
        - The pasted redirect URL does not contain a valid code
    """
    pass


class SpotifyError(PlaymateError):
    """
    Raised when a Spotify Web API call fails.

    Attributes:
        is_auth_error: True if Spotify rejected the credential (401/403).
        is_rate_limit: True if the request was rate limited (429).
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_auth_error: bool = False,
        is_rate_limit: bool = False
    ) -> None:
        super().__init__(message, details)
        self.is_auth_error = is_auth_error
        self.is_rate_limit = is_rate_limit


class PlaylistError(PlaymateError):
    """
    Raised when the playlist selection cannot possibly succeed.

    The only case today is an account with no playlists at all, where
    the selection menu would have nothing to offer.
    """
    pass
