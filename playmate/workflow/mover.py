"""
Move the currently playing item to the end of the target playlist.

Steps, in order, each one a remote call:
    1. Get the currently playing item. Nothing playing -> NOTHING_PLAYING.
    2. Local files have no Spotify id and cannot be put in a playlist
       -> LOCAL_ITEM, nothing else is called.
    3. Remove every occurrence of the item from the playlist.
    4. Add the item to the playlist (Spotify appends at the end).

The snapshot ids returned by steps 3 and 4 are not used. If step 4 fails
after step 3 succeeded, the item is simply missing from the playlist
until the next run; no rollback is attempted.
"""

from dataclasses import dataclass
from enum import Enum

from playmate.core.exceptions import SpotifyError
from playmate.core.logger import get_logger
from playmate.spotify.client import SpotifyClient
from playmate.spotify.models import PlayingItem

logger = get_logger(__name__)


class MoveStatus(Enum):
    """Terminal states of a run. None of them is an error."""
    NOTHING_PLAYING = "nothing_playing"
    LOCAL_ITEM = "local_item"
    MOVED = "moved"


@dataclass(frozen=True)
class MoveResult:
    """
    Attributes:
        status: What happened.
        item: The playing item, None when nothing was playing.
    """
    status: MoveStatus
    item: PlayingItem | None = None

    def __post_init__(self) -> None:
        if self.status is not MoveStatus.NOTHING_PLAYING and self.item is None:
            raise ValueError(f"{self.status.name} result requires the playing item")

    @property
    def message(self) -> str:
        """Notice shown to the user."""
        if self.status is MoveStatus.NOTHING_PLAYING:
            return "No track is playing"
        if self.status is MoveStatus.LOCAL_ITEM:
            return "The current track is local, so it cannot be added to the playlist"
        return f"Moved '{self.item.name}' to the end of the playlist"


def get_playing_item(client: SpotifyClient) -> PlayingItem | None:
    """
    Return the currently playing item, or None when nothing is playing.

    Raises:
        SpotifyError: If playback is active but carries no item (ads,
                      private sessions) or the request fails.
    """
    playing = client.currently_playing()
    if playing is None:
        return None

    item = playing.get("item")
    if item is None:
        raise SpotifyError(
            "Unable to get currently playing item",
            details={"currently_playing_type": playing.get("currently_playing_type")}
        )
    return PlayingItem.from_spotify_data(item)


def move_current_track(
    playlist_id: str,
    client: SpotifyClient | None = None
) -> MoveResult:
    """
    Move the currently playing item to the end of a playlist.

    Args:
        playlist_id: Target playlist id, URI or URL.
        client: Spotify client. Defaults to the SpotifyClient singleton.

    Returns:
        MoveResult describing the outcome.

    Raises:
        SpotifyError: If any remote call fails. No retry.
    """
    if client is None:
        client = SpotifyClient()

    item = get_playing_item(client)
    if item is None:
        logger.debug("Nothing is playing")
        return MoveResult(MoveStatus.NOTHING_PLAYING)

    if not item.has_stable_id:
        logger.debug(f"Skipping local item: {item.name}")
        return MoveResult(MoveStatus.LOCAL_ITEM, item)

    snapshot_id = client.playlist_remove_all_occurrences_of_items(playlist_id, [item.uri])
    logger.debug(f"Removed {item.uri} from {playlist_id} (snapshot {snapshot_id})")

    snapshot_id = client.playlist_add_items(playlist_id, [item.uri])
    logger.debug(f"Added {item.uri} to {playlist_id} (snapshot {snapshot_id})")

    logger.debug(f"Moved {item.item_type} '{item.name}' to playlist {playlist_id}")
    return MoveResult(MoveStatus.MOVED, item)
