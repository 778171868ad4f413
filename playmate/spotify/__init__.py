"""
Spotify integration module for playmate.

    - SessionAuthenticator, build_oauth: cached-or-interactive OAuth
    - SpotifyClient: Singleton API client for the four remote operations
    - PlaylistCandidate, PlayingItem: Data models

Usage:
    from playmate.spotify import SessionAuthenticator, SpotifyClient, build_oauth

    oauth = build_oauth(settings, store.token_cache_path(profile))
    SpotifyClient.init(SessionAuthenticator(oauth).authenticate())
"""

from playmate.spotify.auth import SCOPES, SessionAuthenticator, build_oauth
from playmate.spotify.client import SpotifyClient
from playmate.spotify.models import PlayingItem, PlaylistCandidate

__all__ = [
    # Auth
    "SCOPES",
    "SessionAuthenticator",
    "build_oauth",
    # Client
    "SpotifyClient",
    # Models
    "PlaylistCandidate",
    "PlayingItem",
]
