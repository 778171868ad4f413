"""
Application settings for playmate.

Settings are the values that do not belong to a profile:
    - The application-data root under which every profile lives
    - The Spotify application credentials (client id and secret)
    - The OAuth redirect URI registered for the application

The application-data root is passed in explicitly (the CLI takes it from
--app-data-dir or the APPDATA environment variable), so nothing below the
CLI reads the process environment for it.

Credentials are read from the environment, after loading a .env file from
the current directory if one exists:

    SPOTIPY_CLIENT_ID=your_client_id_here
    SPOTIPY_CLIENT_SECRET=your_client_secret_here
    SPOTIPY_REDIRECT_URI=http://localhost:8888/callback   # optional
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from playmate.core.exceptions import ConfigError, SetupError


APP_DIR_NAME = "playmate"
DEFAULT_REDIRECT_URI = "http://localhost:8888/callback"

CLIENT_ID_VAR = "SPOTIPY_CLIENT_ID"
CLIENT_SECRET_VAR = "SPOTIPY_CLIENT_SECRET"
REDIRECT_URI_VAR = "SPOTIPY_REDIRECT_URI"


@dataclass(frozen=True)
class Settings:
    """
    Process-wide settings.

    Attributes:
        app_data_dir: Platform application-data directory. playmate keeps
                      everything in app_data_dir / "playmate".
        client_id: Spotify application client ID.
        client_secret: Spotify application client secret.
        redirect_uri: Redirect URI registered in the Spotify dashboard.
    """
    app_data_dir: Path
    client_id: str
    client_secret: str
    redirect_uri: str = DEFAULT_REDIRECT_URI

    @property
    def root_dir(self) -> Path:
        """Directory holding all playmate state."""
        return self.app_data_dir / APP_DIR_NAME

    @property
    def logs_dir(self) -> Path:
        return self.root_dir / "logs"


def load_settings(
    app_data_dir: Path | None,
    env: Mapping[str, str] | None = None,
    dotenv: bool = True
) -> Settings:
    """
    Build and validate the process settings.

    Args:
        app_data_dir: Application-data directory, or None if the caller
                      could not find one.
        env: Mapping to read credentials from. Defaults to os.environ.
        dotenv: Whether to load a .env file into os.environ first.

    Returns:
        Settings: A frozen dataclass with validated values.

    Raises:
        SetupError: If app_data_dir is None.
        ConfigError: If the client id or secret is missing or empty.
    """
    if app_data_dir is None:
        raise SetupError(
            "No application-data directory: set APPDATA or pass --app-data-dir"
        )

    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    if env is None:
        env = os.environ

    client_id = env.get(CLIENT_ID_VAR, "").strip()
    client_secret = env.get(CLIENT_SECRET_VAR, "").strip()

    if not client_id:
        raise ConfigError(
            f"'{CLIENT_ID_VAR}' must be set in the environment or .env",
            details={"field": CLIENT_ID_VAR}
        )
    if not client_secret:
        raise ConfigError(
            f"'{CLIENT_SECRET_VAR}' must be set in the environment or .env",
            details={"field": CLIENT_SECRET_VAR}
        )

    redirect_uri = env.get(REDIRECT_URI_VAR, "").strip() or DEFAULT_REDIRECT_URI

    return Settings(
        app_data_dir=Path(app_data_dir).expanduser(),
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri
    )
