"""
playmate: move the currently playing Spotify track into a playlist.

Each run finds the track playing on the user's account, removes every
occurrence of it from the profile's target playlist and appends it again,
so the playlist ends with the most recently "played-and-kept" tracks and
never holds duplicates.

Architecture:
    core/       - Settings, per-profile config.toml, logging, exceptions
    spotify/    - OAuth session with token cache, API client, models
    workflow/   - First-run playlist selection, track move
    cli.py      - Command-line interface

Usage:
    Command Line:
        playmate
        playmate --profile work

    Python API:
        from playmate.core import ProfileStore, load_settings
        from playmate.spotify import SessionAuthenticator, SpotifyClient, build_oauth
        from playmate.workflow import move_current_track, resolve_playlist

        settings = load_settings(Path(os.environ["APPDATA"]))
        store = ProfileStore(settings.app_data_dir)
        config = store.load("default")

        oauth = build_oauth(settings, store.token_cache_path("default"))
        client = SpotifyClient.init(SessionAuthenticator(oauth).authenticate())

        playlist_id = config.playlist_id or resolve_playlist(client)
        print(move_current_track(playlist_id, client).message)
"""

import logging

__version__ = "0.1.0"

# Errors raised before setup_logging() must not reach logging.lastResort
logging.getLogger(__name__).addHandler(logging.NullHandler())
