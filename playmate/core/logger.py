"""
Logging configuration for playmate.

Two outputs:
    - Console: compact colored messages (INFO and above, DEBUG with --verbose)
    - playmate.log: every record at DEBUG, with timestamps, rotated by size

User-facing notices ("No track is playing", the playlist menu) are written
with click.echo by the CLI; the console handler carries progress and
diagnostics.

Log File Location:
    <app-data>/playmate/logs/playmate.log (plus up to 3 rotated backups).
    The program runs once per keypress or shortcut, so records are
    appended instead of creating a new file per run.

Usage:
    from playmate.core.logger import setup_logging, get_logger

    setup_logging(settings.logs_dir)  # Call once at startup
    logger = get_logger(__name__)     # Get logger for each module
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TextIO


LOG_FILENAME = "playmate.log"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that prefixes each message with a colored level name.

    Colors are dropped when use_colors is False (e.g. output is not a TTY).
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return f"{record.levelname}: {record.getMessage()}"

        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


def setup_logging(
    logs_dir: Path,
    verbose: bool = False,
    stream: TextIO | None = None
) -> Path:
    """
    Configure the root logger. Call once at startup.

    Args:
        logs_dir: Directory for playmate.log. Created if missing.
        verbose: Show DEBUG records on the console.
        stream: Console stream, defaults to stderr.

    Returns:
        Path of the log file.

    Raises:
        OSError: If logs_dir cannot be created or the log file opened.
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / LOG_FILENAME

    if stream is None:
        stream = sys.stderr

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(
        ColoredConsoleFormatter(use_colors=getattr(stream, "isatty", lambda: False)())
    )
    root_logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(file_handler)

    # spotipy and urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("spotipy").setLevel(logging.INFO)

    return log_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Loggers obtained before setup_logging() is called have no handlers
    and produce no output until it runs.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush and close every root handler. Typically called from a finally block.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        root_logger.removeHandler(handler)
