"""
Session authentication for playmate.

SessionAuthenticator owns the two-state machine Unauthenticated ->
Authenticated for one profile:

    1. If the profile's token cache holds a token that is still valid, or
       can be refreshed, the session is authenticated without any prompt.
    2. Otherwise the user is walked through the browser consent flow:
       press enter, log in, paste the URL Spotify redirected to. The
       resulting token is written to the cache by spotipy.

The token cache lives at <app-data>/playmate/<profile>/token_cache.json
and is read and written exclusively through spotipy's CacheFileHandler.
Once authenticated, spotipy refreshes expired tokens transparently on
each request and writes them back to the same file.
"""

import webbrowser
from pathlib import Path
from typing import Callable

import click
import requests
from spotipy.cache_handler import CacheFileHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from playmate.core.config import Settings
from playmate.core.exceptions import AuthError
from playmate.core.logger import get_logger

logger = get_logger(__name__)


SCOPES = [
    "user-read-currently-playing",
    "user-read-playback-state",
    "playlist-read-private",
    "playlist-modify-private",
    "playlist-modify-public",
    "user-library-modify",
    "user-library-read",
]

# Keys every cached token must carry to be usable or refreshable
REQUIRED_TOKEN_KEYS = ("access_token", "refresh_token", "expires_at")
REQUIRED_TOKEN_TYPES = {"access_token": str, "refresh_token": str, "expires_at": int}

LOGIN_INSTRUCTIONS = (
    "A browser window will open to prompt you to log in to Spotify. "
    "Once you have logged in, it will redirect you to a page that will show you an error. "
    "This is expected. Copy the URL of the page and paste it into the terminal."
)


def build_oauth(settings: Settings, cache_path: Path) -> SpotifyOAuth:
    """
    Create the OAuth manager for one profile.

    The browser is opened by SessionAuthenticator rather than by spotipy,
    so that the readiness prompt comes first.
    """
    return SpotifyOAuth(
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        redirect_uri=settings.redirect_uri,
        scope=" ".join(SCOPES),
        cache_handler=CacheFileHandler(cache_path=str(cache_path)),
        open_browser=False
    )


class SessionAuthenticator:
    """
    Obtains a usable access credential for one profile.

    Attributes:
        oauth: spotipy OAuth manager bound to the profile's token cache.
        input_func: Reads one line from the user (input() by default).
        open_browser: Opens a URL in a browser (webbrowser.open by default).
        echo: Writes a message for the user (click.echo by default).

    Example:
        oauth = build_oauth(settings, store.token_cache_path(profile))
        auth_manager = SessionAuthenticator(oauth).authenticate()
        SpotifyClient.init(auth_manager)
    """

    def __init__(
        self,
        oauth: SpotifyOAuth,
        input_func: Callable[[str], str] = input,
        open_browser: Callable[[str], bool] = webbrowser.open,
        echo: Callable[[str], None] = click.echo
    ) -> None:
        self.oauth = oauth
        self.input_func = input_func
        self.open_browser = open_browser
        self.echo = echo

    def has_valid_cached_token(self) -> bool:
        """
        Check whether the token cache can authenticate without a prompt.

        Returns:
            True if a cached token exists and is unexpired or was refreshed.
            False if there is no cached token, it was issued for fewer
            scopes than playmate needs, or the refresh token was rejected.

        Raises:
            AuthError: If the cache file is corrupted, or the refresh
                       request could not reach Spotify.
        """
        try:
            token_info = self.oauth.cache_handler.get_cached_token()
        except ValueError as e:
            raise AuthError(
                f"Token cache is corrupted: {e}",
                details={"original_error": str(e)}
            ) from e

        if token_info is None:
            # spotipy also returns None for a cache file it could not parse
            cache_path = getattr(self.oauth.cache_handler, "cache_path", None)
            if cache_path is not None and Path(cache_path).exists():
                raise AuthError(
                    f"Token cache is corrupted: {cache_path}",
                    details={"file_path": str(cache_path)}
                )
            logger.debug("No cached token found")
            return False

        if not isinstance(token_info, dict) or not all(
            key in token_info for key in REQUIRED_TOKEN_KEYS
        ):
            raise AuthError(
                "Token cache is malformed or missing essential keys",
                details={"required_keys": list(REQUIRED_TOKEN_KEYS)}
            )

        for key, expected_type in REQUIRED_TOKEN_TYPES.items():
            value = token_info[key]
            # bool is an int subclass but never a valid expiry
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise AuthError(
                    f"Token cache is malformed: '{key}' must be {expected_type.__name__}",
                    details={"key": key, "value": repr(value)}
                )

        try:
            validated = self.oauth.validate_token(token_info)
        except SpotifyOauthError as e:
            logger.warning(f"Cached token could not be refreshed, login required: {e}")
            return False
        except requests.RequestException as e:
            raise AuthError(
                f"Failed to refresh access token: {e}",
                details={"original_error": str(e)}
            ) from e

        if validated is None:
            logger.info("Cached token does not cover the required scopes, login required")
            return False

        return True

    def authenticate(self) -> SpotifyOAuth:
        """
        Return an OAuth manager that holds a usable credential.

        Raises:
            AuthError: If the cache is corrupted or the interactive
                       exchange fails. There is no retry.
        """
        if self.has_valid_cached_token():
            logger.debug("Authenticated from token cache")
            return self.oauth

        self._authorize_interactively()
        logger.info("Authenticated with Spotify")
        return self.oauth

    def _authorize_interactively(self) -> None:
        """Run the browser consent flow and store the resulting token."""
        self.echo(LOGIN_INSTRUCTIONS)
        self.input_func("Press enter to continue. ")

        url = self.oauth.get_authorize_url()
        self.echo(f"Opening {url}")
        try:
            if not self.open_browser(url):
                self.echo("Could not open a browser, please open the URL above manually.")
        except webbrowser.Error as e:
            logger.warning(f"Could not open a browser: {e}")
            self.echo("Could not open a browser, please open the URL above manually.")

        response = self.input_func("Enter the URL you were redirected to: ").strip()

        try:
            code = self.oauth.parse_response_code(response)
            self.oauth.get_access_token(code, as_dict=False, check_cache=False)
        except (SpotifyOauthError, requests.RequestException) as e:
            raise AuthError(
                f"Couldn't authenticate successfully: {e}",
                details={"original_error": str(e)}
            ) from e
