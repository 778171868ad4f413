"""
Spotify API client singleton for playmate.

This module wraps spotipy so the rest of the application only ever sees
SpotifyError, never spotipy or requests exceptions.

Singleton Pattern:
    SpotifyClient must be initialized once with init(), after which
    SpotifyClient() returns the same instance. Calling init() twice raises.

Usage:
    from playmate.spotify.client import SpotifyClient

    SpotifyClient.init(auth_manager)   # an authenticated SpotifyOAuth

    client = SpotifyClient()
    playing = client.currently_playing()

Token Refresh:
    spotipy refreshes the access token through the auth manager before any
    request whose token has expired, and writes the new token back to the
    profile's cache file. Nothing here needs to handle expiry.
"""

from typing import Any

import requests
import spotipy
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from playmate.core.exceptions import SpotifyError
from playmate.core.logger import get_logger

logger = get_logger(__name__)


# Spotify API page size limit for /me/playlists
PLAYLISTS_PAGE_SIZE = 50

# The currently-playing endpoint omits episodes unless asked for them
PLAYING_ADDITIONAL_TYPES = "track,episode"

# Every failed request is final. spotipy would otherwise retry 5xx and 429
# responses, including the add POST, which can append the track twice.
SPOTIPY_RETRIES = 0


def _wrap_error(error: Exception, action: str, details: dict | None = None) -> SpotifyError:
    """Translate a spotipy/requests exception into a SpotifyError."""
    details = dict(details or {})
    details["original_error"] = str(error)

    if isinstance(error, spotipy.SpotifyException):
        details["http_status"] = error.http_status
        if error.http_status == 429:
            return SpotifyError(
                f"Rate limited while trying to {action}",
                details=details,
                is_rate_limit=True
            )
        if error.http_status in (401, 403):
            return SpotifyError(
                f"Not authorized to {action}: {error.msg}",
                details=details,
                is_auth_error=True
            )
        return SpotifyError(f"Failed to {action}: {error.msg}", details=details)

    if isinstance(error, SpotifyOauthError):
        return SpotifyError(
            f"Failed to refresh access token while trying to {action}: {error}",
            details=details,
            is_auth_error=True
        )

    return SpotifyError(f"Failed to {action}: {error}", details=details)


class SpotifyClientMeta(type):
    """
    Metaclass implementing the singleton pattern for SpotifyClient.

    Attributes:
        _instance: The singleton SpotifyClient instance, or None.
        _initialized: Flag indicating whether init() has been called.
    """

    _instance: "SpotifyClient | None" = None
    _initialized: bool = False

    def __call__(cls) -> "SpotifyClient":
        """
        Get the SpotifyClient singleton instance.

        Raises:
            SpotifyError: If init() has not been called yet.
        """
        if cls._instance is None:
            raise SpotifyError(
                "SpotifyClient not initialized. Call SpotifyClient.init("
                "auth_manager) first.",
                is_auth_error=True
            )
        return cls._instance

    def init(cls, auth_manager: SpotifyOAuth) -> "SpotifyClient":
        """
        Initialize the SpotifyClient singleton.

        Args:
            auth_manager: An authenticated SpotifyOAuth, as returned by
                          SessionAuthenticator.authenticate().

        Returns:
            The initialized SpotifyClient singleton instance.

        Raises:
            SpotifyError: If init() has already been called.
        """
        if cls._initialized:
            raise SpotifyError(
                "SpotifyClient.init() has already been called. "
                "Use SpotifyClient() to get the existing instance.",
                is_auth_error=True
            )

        spotify_instance = spotipy.Spotify(
            auth_manager=auth_manager,
            retries=SPOTIPY_RETRIES,
            status_retries=SPOTIPY_RETRIES,
            requests_timeout=None
        )
        instance = super().__call__(spotify_instance)
        cls._instance = instance
        cls._initialized = True

        return instance

    def is_initialized(cls) -> bool:
        return cls._initialized

    def reset(cls) -> None:
        """
        Reset the singleton state (for testing only).
        """
        cls._instance = None
        cls._initialized = False


class SpotifyClient(metaclass=SpotifyClientMeta):
    """
    Singleton Spotify API client.

    Exposes exactly the four remote operations playmate uses: list the
    user's playlists, get the currently playing item, remove all
    occurrences of items from a playlist, and add items to a playlist.
    The two mutations return the playlist's new snapshot id.

    Attributes:
        _spotify: The underlying spotipy.Spotify instance.
    """

    def __init__(self, spotify_instance: spotipy.Spotify) -> None:
        """
        Note:
            Called by the metaclass init() method. Do not call directly.
        """
        self._spotify = spotify_instance

    # =========================================================================
    # Playlist listing
    # =========================================================================

    def current_user_playlists(
        self,
        limit: int = PLAYLISTS_PAGE_SIZE,
        offset: int = 0
    ) -> dict[str, Any]:
        """
        Get one page of the current user's playlists.

        Returns:
            Paging object with 'items', 'total' and 'next'.

        Raises:
            SpotifyError: On any API or network failure.
        """
        try:
            result = self._spotify.current_user_playlists(
                limit=min(limit, PLAYLISTS_PAGE_SIZE),
                offset=offset
            )
        except (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException) as e:
            raise _wrap_error(e, "fetch playlists", {"offset": offset}) from e

        if result is None:
            raise SpotifyError(
                "Failed to fetch playlists: empty response",
                details={"offset": offset}
            )
        return result

    def current_user_all_playlists(self) -> list[dict[str, Any] | None]:
        """
        Get ALL of the current user's playlists, draining every page.

        Returns:
            Raw playlist objects in API order. Entries are passed through
            as-is, including null ones, for the caller to validate.
        """
        all_items: list[dict[str, Any] | None] = []
        offset = 0

        while True:
            response = self.current_user_playlists(offset=offset)
            items = response.get("items") or []
            all_items.extend(items)

            if response.get("next") is None or not items:
                break
            offset += len(items)

        logger.debug(f"Fetched {len(all_items)} playlists")
        return all_items

    # =========================================================================
    # Playback
    # =========================================================================

    def currently_playing(self) -> dict[str, Any] | None:
        """
        Get the user's currently playing object.

        Returns:
            The currently-playing payload ('item', 'is_playing',
            'currently_playing_type', ...) or None when nothing is playing.

        Raises:
            SpotifyError: On any API or network failure.
        """
        try:
            return self._spotify.currently_playing(
                additional_types=PLAYING_ADDITIONAL_TYPES
            )
        except (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException) as e:
            raise _wrap_error(e, "get current track") from e

    # =========================================================================
    # Playlist mutation
    # =========================================================================

    def playlist_remove_all_occurrences_of_items(
        self,
        playlist_id: str,
        items: list[str]
    ) -> str | None:
        """
        Remove every occurrence of the given items from a playlist.

        Removing an item that is not in the playlist is not an error.

        Args:
            playlist_id: Playlist id, URI or URL.
            items: Track/episode URIs (or track ids).

        Returns:
            The playlist's new snapshot id.
        """
        try:
            result = self._spotify.playlist_remove_all_occurrences_of_items(
                playlist_id, items
            )
        except (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException) as e:
            raise _wrap_error(
                e,
                "remove current track from playlist",
                {"playlist_id": playlist_id, "items": items}
            ) from e
        return (result or {}).get("snapshot_id")

    def playlist_add_items(self, playlist_id: str, items: list[str]) -> str | None:
        """
        Append items to the end of a playlist.

        Returns:
            The playlist's new snapshot id.
        """
        try:
            result = self._spotify.playlist_add_items(playlist_id, items)
        except (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException) as e:
            raise _wrap_error(
                e,
                "add current track to playlist",
                {"playlist_id": playlist_id, "items": items}
            ) from e
        return (result or {}).get("snapshot_id")
