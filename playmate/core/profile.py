"""
Per-profile persistent state for playmate.

Each profile owns one directory:

    <app-data>/playmate/<profile>/
        config.toml         ProfileConfig (this module)
        token_cache.json    OAuth credential (spotipy's CacheFileHandler)

config.toml holds up to three keys, all optional:

    playlist_id = "37i9dQZF1DXcBWIGoYBM5M"
    playlist_snapshot_id = "MTYsZjA1..."
    playlist_track_cache = ["4cOdK2wGLETKBW3PvgPWqT", "..."]

A file without playlist_id means the profile has not been configured yet.
The only write the program performs is storing playlist_id right after
the first successful playlist selection. Deleting the file (or the key)
resets the profile.

Writes overwrite the file in place; a crash mid-write can leave a
truncated file, which the next load reports as a ConfigError.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from playmate.core.config import APP_DIR_NAME
from playmate.core.exceptions import ConfigError, SetupError
from playmate.core.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.toml"
TOKEN_CACHE_FILENAME = "token_cache.json"
DEFAULT_PROFILE = "default"


@dataclass(frozen=True)
class ProfileConfig:
    """
    Persisted record for one profile.

    Attributes:
        playlist_id: Target playlist (id, URI or URL), or None when the
                     profile has not been configured.
        playlist_snapshot_id: Last known playlist version marker.
                              Stored for forward compatibility, never read.
        playlist_track_cache: Last known playlist contents.
                              Stored for forward compatibility, never read.
    """
    playlist_id: str | None = None
    playlist_snapshot_id: str | None = None
    playlist_track_cache: tuple[str, ...] | None = None

    @property
    def is_configured(self) -> bool:
        return self.playlist_id is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProfileConfig":
        """
        Build a ProfileConfig from parsed TOML.

        Unknown keys are ignored. Known keys with the wrong type raise
        ConfigError.
        """
        playlist_id = data.get("playlist_id")
        if playlist_id is not None and not isinstance(playlist_id, str):
            raise ConfigError(
                "'playlist_id' must be a string",
                details={"field": "playlist_id", "value": repr(playlist_id)}
            )

        snapshot_id = data.get("playlist_snapshot_id")
        if snapshot_id is not None and not isinstance(snapshot_id, str):
            raise ConfigError(
                "'playlist_snapshot_id' must be a string",
                details={"field": "playlist_snapshot_id", "value": repr(snapshot_id)}
            )

        track_cache = data.get("playlist_track_cache")
        if track_cache is not None:
            if not isinstance(track_cache, list) or not all(
                isinstance(track_id, str) for track_id in track_cache
            ):
                raise ConfigError(
                    "'playlist_track_cache' must be a list of strings",
                    details={"field": "playlist_track_cache"}
                )
            track_cache = tuple(track_cache)

        return cls(
            playlist_id=playlist_id,
            playlist_snapshot_id=snapshot_id,
            playlist_track_cache=track_cache
        )

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; TOML has no null so unset fields are omitted."""
        data: dict[str, Any] = {}
        if self.playlist_id is not None:
            data["playlist_id"] = self.playlist_id
        if self.playlist_snapshot_id is not None:
            data["playlist_snapshot_id"] = self.playlist_snapshot_id
        if self.playlist_track_cache is not None:
            data["playlist_track_cache"] = list(self.playlist_track_cache)
        return data


def validate_profile_name(profile: str) -> str:
    """
    Check that a profile name maps to exactly one directory.

    Raises:
        ConfigError: If the name is empty, is '.' or '..', or contains
                     a path separator.
    """
    name = profile.strip()
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise ConfigError(
            f"Invalid profile name: {profile!r}",
            details={"profile": profile}
        )
    return name


class ProfileStore:
    """
    Reads and writes ProfileConfig records under an application-data root.

    Attributes:
        app_data_dir: Root directory, typically %APPDATA%. The store never
                      looks it up itself.

    Example:
        store = ProfileStore(Path(os.environ["APPDATA"]))
        config = store.load("default")
        if not config.is_configured:
            config = dataclasses.replace(config, playlist_id="abc123")
            store.save("default", config)
    """

    def __init__(self, app_data_dir: Path) -> None:
        self.app_data_dir = Path(app_data_dir)

    def profile_dir(self, profile: str) -> Path:
        return self.app_data_dir / APP_DIR_NAME / validate_profile_name(profile)

    def config_path(self, profile: str) -> Path:
        return self.profile_dir(profile) / CONFIG_FILENAME

    def token_cache_path(self, profile: str) -> Path:
        return self.profile_dir(profile) / TOKEN_CACHE_FILENAME

    def load(self, profile: str) -> ProfileConfig:
        """
        Load a profile, creating an empty config file if there is none.

        Args:
            profile: Profile name, e.g. "default".

        Returns:
            ProfileConfig parsed from config.toml. An empty file yields a
            record with every field set to None.

        Raises:
            ConfigError: If the profile name is invalid, the file is not
                         valid TOML, or a known key has the wrong type.
            SetupError: If the directory or file cannot be created or read.
        """
        config_path = self.config_path(profile)

        if not config_path.exists():
            logger.info("Config file not found, creating new one")
            try:
                config_path.parent.mkdir(parents=True, exist_ok=True)
                config_path.touch()
            except OSError as e:
                raise SetupError(
                    f"Failed to create config file: {e}",
                    details={"file_path": str(config_path), "original_error": str(e)}
                ) from e

        try:
            content = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SetupError(
                f"Failed to read config file: {e}",
                details={"file_path": str(config_path), "original_error": str(e)}
            ) from e

        try:
            raw_config = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(
                f"Invalid TOML in config file {config_path}: {e}",
                details={"file_path": str(config_path), "original_error": str(e)}
            ) from e

        config = ProfileConfig.from_dict(raw_config)
        logger.debug(f"Loaded profile '{profile}' from {config_path}")
        return config

    def save(self, profile: str, config: ProfileConfig) -> None:
        """
        Overwrite the profile's config file with the full record.

        Raises:
            ConfigError: If the profile name is invalid.
            SetupError: If the file cannot be written.
        """
        config_path = self.config_path(profile)
        content = tomli_w.dumps(config.to_dict())

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise SetupError(
                f"Failed to write config file: {e}",
                details={"file_path": str(config_path), "original_error": str(e)}
            ) from e

        logger.debug(f"Saved profile '{profile}' to {config_path}")
