"""
Data models for the Spotify objects playmate touches.

Only two shapes matter:
    - PlaylistCandidate: one entry of the current user's playlists, offered
      in the selection menu
    - PlayingItem: the track or episode returned by the currently-playing
      endpoint

Both are frozen dataclasses built from raw spotipy dictionaries with
from_spotify_data(), mirroring the API fields they need and nothing else.
"""

from dataclasses import dataclass
from typing import Any

from playmate.core.exceptions import SpotifyError


@dataclass(frozen=True)
class PlaylistCandidate:
    """
    A playlist the user can pick as the target.

    Attributes:
        playlist_id: Spotify playlist ID (22-character base62 string).
        name: Display name shown in the selection menu.
    """
    playlist_id: str
    name: str

    @classmethod
    def from_spotify_data(cls, data: dict[str, Any] | None) -> "PlaylistCandidate":
        """
        Create a candidate from a simplified playlist object.

        Raises:
            SpotifyError: If the entry is missing or lacks an id or name.
                          A single unreadable entry fails the whole listing.
        """
        if not data or not data.get("id") or data.get("name") is None:
            raise SpotifyError(
                "Error iterating over playlists: unreadable playlist entry",
                details={"entry": repr(data)}
            )
        return cls(playlist_id=data["id"], name=data["name"])


@dataclass(frozen=True)
class PlayingItem:
    """
    The item currently playing on the user's account.

    Attributes:
        item_id: Spotify ID, or None for local files.
        uri: Spotify URI ("spotify:track:..." or "spotify:episode:...").
             Local files carry a "spotify:local:..." URI that the playlist
             endpoints do not accept.
        name: Track or episode title.
        item_type: "track" or "episode".
        is_local: True for files from the user's local library.
    """
    item_id: str | None
    uri: str | None
    name: str
    item_type: str
    is_local: bool = False

    @property
    def has_stable_id(self) -> bool:
        """Whether the item can be removed from or added to a playlist."""
        return not self.is_local and bool(self.item_id) and bool(self.uri)

    @classmethod
    def from_spotify_data(cls, data: dict[str, Any]) -> "PlayingItem":
        return cls(
            item_id=data.get("id"),
            uri=data.get("uri"),
            name=data.get("name") or "Unknown",
            item_type=data.get("type", "track"),
            is_local=bool(data.get("is_local", False))
        )
