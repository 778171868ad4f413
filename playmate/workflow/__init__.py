"""
Per-invocation workflow for playmate.

    - resolver: first-run interactive playlist selection
    - mover: move the currently playing item into the target playlist
"""

from playmate.workflow.mover import MoveResult, MoveStatus, move_current_track
from playmate.workflow.resolver import parse_selection, resolve_playlist, select_playlist

__all__ = [
    "MoveResult",
    "MoveStatus",
    "move_current_track",
    "parse_selection",
    "resolve_playlist",
    "select_playlist",
]
