"""
Interactive playlist selection.

On the first run of a profile the user picks the target playlist from a
numbered menu of their playlists:

    Select a playlist
       1: Liked Later
       2: Road Trip
    Select which playlist to use by typing the playlist's number and pressing enter:
    >

Anything that is not a number between 1 and the number of playlists
prints "Invalid selection" and shows the menu again, for as long as it
takes. The returned id is persisted by the caller and never re-resolved.

parse_selection() is pure so the validation rules can be tested without
any I/O; select_playlist() is the thin loop around it.
"""

from typing import Callable, Sequence

import click

from playmate.core.exceptions import PlaylistError
from playmate.core.logger import get_logger
from playmate.spotify.client import SpotifyClient
from playmate.spotify.models import PlaylistCandidate

logger = get_logger(__name__)


MENU_HEADER = "Select a playlist"
SELECTION_PROMPT = (
    "Select which playlist to use by typing the playlist's number and pressing enter:\n> "
)
INVALID_SELECTION = "Invalid selection\n"


def parse_selection(text: str, count: int) -> int | None:
    """
    Validate one line of menu input.

    Args:
        text: The raw line typed by the user.
        count: Number of playlists in the menu.

    Returns:
        The 0-based index of the chosen playlist, or None if the input is
        not a plain decimal number in [1, count].

    Example:
        parse_selection(" 2\\n", 3)  # 1
        parse_selection("0", 3)      # None
        parse_selection("+1", 3)     # None
    """
    selection = text.strip()
    if not selection.isascii() or not selection.isdigit():
        return None

    number = int(selection)
    if number < 1 or number > count:
        return None
    return number - 1


def format_menu(candidates: Sequence[PlaylistCandidate]) -> list[str]:
    """Menu lines: a header, then one right-aligned 1-based entry per playlist."""
    lines = [MENU_HEADER]
    for count, candidate in enumerate(candidates, 1):
        lines.append(f"{count:>4}: {candidate.name}")
    return lines


def select_playlist(
    candidates: Sequence[PlaylistCandidate],
    input_func: Callable[[str], str] = input,
    echo: Callable[[str], None] = click.echo
) -> PlaylistCandidate:
    """
    Prompt until the user picks a valid playlist.

    Args:
        candidates: Fully materialized list of playlists.
        input_func: Reads one line, given a prompt.
        echo: Writes one message.

    Returns:
        The chosen PlaylistCandidate.

    Raises:
        PlaylistError: If candidates is empty.
        EOFError: If input ends before a valid selection is made.
    """
    if not candidates:
        raise PlaylistError(
            "No playlists found on this account. Create one in Spotify and run again."
        )

    while True:
        for line in format_menu(candidates):
            echo(line)

        index = parse_selection(input_func(SELECTION_PROMPT), len(candidates))
        if index is None:
            echo(INVALID_SELECTION)
            continue

        return candidates[index]


def fetch_candidates(client: SpotifyClient) -> list[PlaylistCandidate]:
    """
    Fetch every playlist of the current user as menu candidates.

    Raises:
        SpotifyError: If the listing fails or any single entry is unreadable.
    """
    return [
        PlaylistCandidate.from_spotify_data(item)
        for item in client.current_user_all_playlists()
    ]


def resolve_playlist(
    client: SpotifyClient | None = None,
    input_func: Callable[[str], str] = input,
    echo: Callable[[str], None] = click.echo
) -> str:
    """
    Let the user choose the target playlist and return its id.

    Args:
        client: Spotify client. Defaults to the SpotifyClient singleton.
        input_func: Reads one line, given a prompt.
        echo: Writes one message.

    Returns:
        The selected playlist's Spotify id.
    """
    if client is None:
        client = SpotifyClient()

    candidates = fetch_candidates(client)
    logger.debug(f"Offering {len(candidates)} playlists for selection")

    selected = select_playlist(candidates, input_func=input_func, echo=echo)
    logger.info(f"Selected playlist: {selected.name} ({selected.playlist_id})")
    return selected.playlist_id
