"""Test configuration and fixtures"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import Mock

from playmate.core.profile import ProfileStore
from playmate.spotify.client import SpotifyClient


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def store(temp_dir):
    """ProfileStore rooted in a temporary app-data directory"""
    return ProfileStore(temp_dir)


@pytest.fixture(autouse=True)
def reset_spotify_client():
    """Every test starts without an initialized SpotifyClient"""
    SpotifyClient.reset()
    yield
    SpotifyClient.reset()


@pytest.fixture
def mock_client():
    """Stand-in for SpotifyClient with a playing catalog track"""
    client = Mock()
    client.currently_playing.return_value = {
        'is_playing': True,
        'currently_playing_type': 'track',
        'item': {
            'id': 'track123',
            'uri': 'spotify:track:track123',
            'name': 'Test Song',
            'type': 'track',
            'is_local': False
        }
    }
    client.playlist_remove_all_occurrences_of_items.return_value = 'snap1'
    client.playlist_add_items.return_value = 'snap2'
    client.current_user_all_playlists.return_value = [
        {'id': 'pl1', 'name': 'Road Trip'},
        {'id': 'pl2', 'name': 'Keepers'},
        {'id': 'pl3', 'name': 'Focus'}
    ]
    return client


@pytest.fixture
def local_track_data():
    """Currently-playing payload for a file from the local library"""
    return {
        'is_playing': True,
        'currently_playing_type': 'track',
        'item': {
            'id': None,
            'uri': 'spotify:local:Artist:Album:Local+Song:215',
            'name': 'Local Song',
            'type': 'track',
            'is_local': True
        }
    }
