"""Test the Spotify client wrapper and models"""

from unittest.mock import Mock, patch

import pytest
import requests
import spotipy

from playmate.core.exceptions import SpotifyError
from playmate.spotify.client import SpotifyClient
from playmate.spotify.models import PlayingItem, PlaylistCandidate


@pytest.fixture
def spotify():
    """Initialized SpotifyClient over a mocked spotipy.Spotify"""
    with patch('playmate.spotify.client.spotipy.Spotify') as spotify_class:
        SpotifyClient.init(Mock())
        yield spotify_class.return_value


class TestSpotifyClientSingleton:
    """Test singleton behaviour"""

    def test_not_initialized_raises(self):
        with pytest.raises(SpotifyError):
            SpotifyClient()

    def test_init_twice_raises(self, spotify):
        with pytest.raises(SpotifyError):
            SpotifyClient.init(Mock())

    def test_returns_same_instance(self, spotify):
        assert SpotifyClient() is SpotifyClient()
        assert SpotifyClient.is_initialized()

    def test_requests_are_never_retried(self):
        """Test spotipy is built without retries, backoff or timeout"""
        auth_manager = Mock()

        with patch('playmate.spotify.client.spotipy.Spotify') as spotify_class:
            SpotifyClient.init(auth_manager)

        spotify_class.assert_called_once_with(
            auth_manager=auth_manager,
            retries=0,
            status_retries=0,
            requests_timeout=None
        )


class TestSpotifyClientCalls:
    """Test the wrapped API calls"""

    def test_all_playlists_drains_pages(self, spotify):
        spotify.current_user_playlists.side_effect = [
            {'items': [{'id': 'pl1', 'name': 'A'}, {'id': 'pl2', 'name': 'B'}], 'next': 'page2'},
            {'items': [{'id': 'pl3', 'name': 'C'}], 'next': None},
        ]

        playlists = SpotifyClient().current_user_all_playlists()

        assert [p['id'] for p in playlists] == ['pl1', 'pl2', 'pl3']
        spotify.current_user_playlists.assert_called_with(limit=50, offset=2)

    def test_currently_playing_includes_episodes(self, spotify):
        spotify.currently_playing.return_value = None

        assert SpotifyClient().currently_playing() is None
        spotify.currently_playing.assert_called_once_with(additional_types="track,episode")

    def test_mutations_return_snapshot(self, spotify):
        spotify.playlist_remove_all_occurrences_of_items.return_value = {'snapshot_id': 'snap1'}
        spotify.playlist_add_items.return_value = {'snapshot_id': 'snap2'}
        client = SpotifyClient()

        assert client.playlist_remove_all_occurrences_of_items('pl1', ['spotify:track:t']) == 'snap1'
        assert client.playlist_add_items('pl1', ['spotify:track:t']) == 'snap2'

    def test_rate_limit_is_flagged(self, spotify):
        spotify.currently_playing.side_effect = spotipy.SpotifyException(429, -1, "rate limited")

        with pytest.raises(SpotifyError) as exc_info:
            SpotifyClient().currently_playing()

        assert exc_info.value.is_rate_limit

    def test_unauthorized_is_flagged(self, spotify):
        spotify.playlist_add_items.side_effect = spotipy.SpotifyException(403, -1, "forbidden")

        with pytest.raises(SpotifyError) as exc_info:
            SpotifyClient().playlist_add_items('pl1', ['spotify:track:t'])

        assert exc_info.value.is_auth_error

    def test_network_error_is_wrapped(self, spotify):
        spotify.current_user_playlists.side_effect = requests.ConnectionError("offline")

        with pytest.raises(SpotifyError):
            SpotifyClient().current_user_all_playlists()


class TestModels:
    """Test data models"""

    def test_playlist_candidate(self):
        candidate = PlaylistCandidate.from_spotify_data({'id': 'pl1', 'name': 'Road Trip'})

        assert candidate == PlaylistCandidate('pl1', 'Road Trip')

    @pytest.mark.parametrize("data", [None, {}, {'id': 'pl1'}, {'name': 'No id'}])
    def test_unreadable_playlist_raises(self, data):
        with pytest.raises(SpotifyError):
            PlaylistCandidate.from_spotify_data(data)

    def test_catalog_track_has_stable_id(self):
        item = PlayingItem.from_spotify_data({
            'id': 'track123', 'uri': 'spotify:track:track123', 'name': 'Song', 'type': 'track'
        })

        assert item.has_stable_id

    def test_local_track_has_no_stable_id(self):
        item = PlayingItem.from_spotify_data({
            'id': None, 'uri': 'spotify:local:a:b:c:1', 'name': 'Song', 'type': 'track', 'is_local': True
        })

        assert not item.has_stable_id
