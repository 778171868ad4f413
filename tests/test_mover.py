"""Test moving the current track"""

from unittest.mock import Mock, call

import pytest

from playmate.core.exceptions import SpotifyError
from playmate.workflow.mover import MoveResult, MoveStatus, move_current_track


class TestMoveCurrentTrack:
    """Test the remove-then-add workflow"""

    def test_nothing_playing(self, mock_client):
        mock_client.currently_playing.return_value = None

        result = move_current_track("pl1", mock_client)

        assert result.status is MoveStatus.NOTHING_PLAYING
        assert result.message == "No track is playing"
        mock_client.playlist_remove_all_occurrences_of_items.assert_not_called()
        mock_client.playlist_add_items.assert_not_called()

    def test_local_track_is_skipped(self, mock_client, local_track_data):
        mock_client.currently_playing.return_value = local_track_data

        result = move_current_track("pl1", mock_client)

        assert result.status is MoveStatus.LOCAL_ITEM
        assert "local" in result.message
        mock_client.playlist_remove_all_occurrences_of_items.assert_not_called()
        mock_client.playlist_add_items.assert_not_called()

    def test_removes_then_adds(self, mock_client):
        """Test the item is removed before it is appended"""
        manager = Mock()
        manager.attach_mock(mock_client.playlist_remove_all_occurrences_of_items, 'remove')
        manager.attach_mock(mock_client.playlist_add_items, 'add')

        result = move_current_track("pl1", mock_client)

        assert result.status is MoveStatus.MOVED
        assert result.item.item_id == "track123"
        assert result.message == "Moved 'Test Song' to the end of the playlist"
        assert manager.mock_calls == [
            call.remove("pl1", ["spotify:track:track123"]),
            call.add("pl1", ["spotify:track:track123"]),
        ]

    def test_episode_uses_uri(self, mock_client):
        mock_client.currently_playing.return_value = {
            'currently_playing_type': 'episode',
            'item': {
                'id': 'ep1',
                'uri': 'spotify:episode:ep1',
                'name': 'Test Episode',
                'type': 'episode'
            }
        }

        result = move_current_track("pl1", mock_client)

        assert result.status is MoveStatus.MOVED
        mock_client.playlist_add_items.assert_called_once_with("pl1", ["spotify:episode:ep1"])

    def test_playback_without_item_raises(self, mock_client):
        mock_client.currently_playing.return_value = {
            'currently_playing_type': 'ad',
            'item': None
        }

        with pytest.raises(SpotifyError):
            move_current_track("pl1", mock_client)

    def test_add_failure_is_not_rolled_back(self, mock_client):
        """Test an add failure propagates after the removal went through"""
        mock_client.playlist_add_items.side_effect = SpotifyError("Failed to add")

        with pytest.raises(SpotifyError):
            move_current_track("pl1", mock_client)

        mock_client.playlist_remove_all_occurrences_of_items.assert_called_once()


class TestPlaylistSimulation:
    """Test the net effect on a playlist's contents"""

    def test_existing_track_ends_up_once_at_end(self, mock_client):
        playlist = ["spotify:track:a", "spotify:track:track123", "spotify:track:b"]

        def remove(playlist_id, items):
            playlist[:] = [uri for uri in playlist if uri not in items]
            return 'snap1'

        def add(playlist_id, items):
            playlist.extend(items)
            return 'snap2'

        mock_client.playlist_remove_all_occurrences_of_items.side_effect = remove
        mock_client.playlist_add_items.side_effect = add

        move_current_track("pl1", mock_client)

        assert playlist == ["spotify:track:a", "spotify:track:b", "spotify:track:track123"]


class TestMoveResult:
    """Test MoveResult construction"""

    @pytest.mark.parametrize("status", [MoveStatus.MOVED, MoveStatus.LOCAL_ITEM])
    def test_item_required(self, status):
        with pytest.raises(ValueError):
            MoveResult(status)

    def test_nothing_playing_without_item(self):
        assert MoveResult(MoveStatus.NOTHING_PLAYING).message == "No track is playing"
