"""
Command-line interface for playmate.

Every invocation moves the track currently playing on Spotify to the end
of the profile's target playlist, removing any earlier occurrence first.

Usage:
    playmate                       # default profile
    playmate --profile work        # separate playlist and login
    playmate -v                    # show debug output

First run of a profile:
    1. Log in through the browser and paste the redirected URL back.
    2. Pick the target playlist from a numbered menu.
    Both answers are remembered; later runs need no interaction.

State:
    <app-data>/playmate/<profile>/config.toml        target playlist
    <app-data>/playmate/<profile>/token_cache.json   Spotify login
    <app-data>/playmate/logs/playmate.log            log file

    <app-data> is --app-data-dir, or the APPDATA environment variable.
    Delete config.toml to pick a different playlist.

Exit Codes:
    0    Track moved, nothing playing, or a local file playing
    1    Setup error (no app-data directory, unwritable files)
    2    Configuration error (bad config.toml, missing credentials)
    3    Authentication error
    4    Spotify API error
    5    No playlist to choose from
    130  Interrupted
"""

import dataclasses
import sys
from pathlib import Path

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100

from playmate import __version__
from playmate.core import (
    AuthError,
    ConfigError,
    DEFAULT_PROFILE,
    PlaylistError,
    PlaymateError,
    ProfileStore,
    SetupError,
    SpotifyError,
    get_logger,
    load_settings,
    setup_logging,
    shutdown_logging,
    validate_profile_name,
)
from playmate.spotify import SessionAuthenticator, SpotifyClient, build_oauth
from playmate.workflow import move_current_track, resolve_playlist

logger = get_logger(__name__)


EXIT_SETUP_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_AUTH_ERROR = 3
EXIT_SPOTIFY_ERROR = 4
EXIT_PLAYLIST_ERROR = 5
EXIT_INTERRUPTED = 130


@click.command()
@click.option(
    "--profile", "-p",
    type=str,
    default=DEFAULT_PROFILE,
    show_default=True,
    metavar="<name>",
    help="Configuration profile to use"
)
@click.option(
    "--app-data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="APPDATA",
    default=None,
    metavar="<dir>",
    help="Application-data directory [env: APPDATA]"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug output"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    profile: str,
    app_data_dir: Path | None,
    verbose: bool,
    version: bool
) -> None:
    """
    Move the currently playing Spotify track to the end of your playlist.

    \b
    The first run asks you to log in and to pick the playlist; both are
    remembered per profile.
    """
    if version:
        click.echo(f"playmate {__version__}")
        ctx.exit(0)

    _run(profile=profile, app_data_dir=app_data_dir, verbose=verbose)


def _run(profile: str, app_data_dir: Path | None, verbose: bool) -> None:
    """
    Execute one invocation.

    Behavior:
        1. Load settings and set up logging
        2. Load (or create) the profile's config
        3. Authenticate, prompting only without a usable cached token
        4. Resolve and persist the playlist if the profile has none
        5. Move the currently playing track

    Raises:
        SystemExit: On fatal errors (with the exit code for the error kind).
    """
    try:
        settings = load_settings(app_data_dir)
        profile = validate_profile_name(profile)

        try:
            log_path = setup_logging(settings.logs_dir, verbose=verbose)
        except OSError as e:
            raise SetupError(
                f"Failed to set up logging: {e}",
                details={"logs_dir": str(settings.logs_dir)}
            ) from e
        logger.debug(f"playmate {__version__} starting, profile '{profile}', log {log_path}")

        store = ProfileStore(settings.app_data_dir)
        config = store.load(profile)

        oauth = build_oauth(settings, store.token_cache_path(profile))
        auth_manager = SessionAuthenticator(oauth).authenticate()
        client = SpotifyClient.init(auth_manager)

        if not config.is_configured:
            playlist_id = resolve_playlist(client)
            config = dataclasses.replace(config, playlist_id=playlist_id)
            store.save(profile, config)

        result = move_current_track(config.playlist_id, client)
        click.echo(result.message)

    except SetupError as e:
        click.echo(f"Setup error: {e.message}", err=True)
        logger.error(f"Setup error: {e.message}", exc_info=True)
        sys.exit(EXIT_SETUP_ERROR)

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        logger.error(f"Configuration error: {e.message}", exc_info=True)
        sys.exit(EXIT_CONFIG_ERROR)

    except AuthError as e:
        click.echo(f"Authentication error: {e.message}", err=True)
        logger.error(f"Authentication error: {e.message}", exc_info=True)
        sys.exit(EXIT_AUTH_ERROR)

    except SpotifyError as e:
        click.echo(f"Spotify error: {e.message}", err=True)
        if e.is_auth_error:
            click.echo(
                "Delete token_cache.json in the profile directory to log in again",
                err=True
            )
        logger.error(f"Spotify error: {e.message}", exc_info=True)
        sys.exit(EXIT_SPOTIFY_ERROR)

    except PlaylistError as e:
        click.echo(f"Playlist error: {e.message}", err=True)
        logger.error(f"Playlist error: {e.message}")
        sys.exit(EXIT_PLAYLIST_ERROR)

    except PlaymateError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        sys.exit(EXIT_SETUP_ERROR)

    except (KeyboardInterrupt, EOFError):
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(EXIT_INTERRUPTED)

    finally:
        shutdown_logging()


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
