"""Test per-profile config storage"""

import pytest

from playmate.core.exceptions import ConfigError
from playmate.core.profile import ProfileConfig, ProfileStore, validate_profile_name


class TestProfileStore:
    """Test loading and saving config.toml"""

    def test_load_creates_empty_config(self, store, temp_dir):
        """Test first load creates directories and an empty file"""
        config = store.load("default")

        config_path = temp_dir / "playmate" / "default" / "config.toml"
        assert config_path.exists()
        assert config_path.read_text() == ""
        assert config == ProfileConfig()
        assert not config.is_configured

    def test_save_then_load_round_trip(self, store):
        """Test all three persisted fields survive a save/load"""
        config = ProfileConfig(
            playlist_id="37i9dQZF1DXcBWIGoYBM5M",
            playlist_snapshot_id="MTYsZjA1",
            playlist_track_cache=("track1", "track2")
        )
        store.save("default", config)

        assert store.load("default") == config

    def test_save_keeps_untouched_fields(self, store):
        """Test a partially filled record round-trips without adding or losing fields"""
        config = ProfileConfig(playlist_id="pl1")
        store.save("default", config)

        loaded = store.load("default")
        assert loaded.playlist_id == "pl1"
        assert loaded.playlist_snapshot_id is None
        assert loaded.playlist_track_cache is None

    def test_load_is_idempotent(self, store):
        """Test repeated loads return equal records and leave the file alone"""
        store.save("default", ProfileConfig(playlist_id="pl1"))
        config_path = store.config_path("default")
        content = config_path.read_text()

        first = store.load("default")
        second = store.load("default")

        assert first == second
        assert config_path.read_text() == content

    def test_profiles_are_separate(self, store):
        """Test each profile has its own file"""
        store.save("work", ProfileConfig(playlist_id="work_pl"))

        assert store.load("work").playlist_id == "work_pl"
        assert store.load("default").playlist_id is None

    def test_unknown_keys_are_ignored(self, store):
        """Test extra keys do not break loading"""
        config_path = store.config_path("default")
        config_path.parent.mkdir(parents=True)
        config_path.write_text('playlist_id = "pl1"\ncolor = "blue"\n')

        assert store.load("default") == ProfileConfig(playlist_id="pl1")

    def test_malformed_toml_raises(self, store):
        """Test invalid TOML is a ConfigError"""
        config_path = store.config_path("default")
        config_path.parent.mkdir(parents=True)
        config_path.write_text("playlist_id = \n")

        with pytest.raises(ConfigError):
            store.load("default")

    def test_wrong_field_type_raises(self, store):
        """Test known keys with the wrong type are a ConfigError"""
        config_path = store.config_path("default")
        config_path.parent.mkdir(parents=True)
        config_path.write_text("playlist_id = 5\n")

        with pytest.raises(ConfigError):
            store.load("default")

    def test_token_cache_path_is_profile_scoped(self, store, temp_dir):
        """Test token cache sits next to the profile's config"""
        assert store.token_cache_path("work") == temp_dir / "playmate" / "work" / "token_cache.json"


class TestProfileNames:
    """Test profile name validation"""

    def test_valid_names(self):
        assert validate_profile_name("default") == "default"
        assert validate_profile_name(" work ") == "work"

    @pytest.mark.parametrize("name", ["", "  ", ".", "..", "a/b", "a\\b"])
    def test_invalid_names(self, name):
        with pytest.raises(ConfigError):
            validate_profile_name(name)

    def test_store_rejects_invalid_name(self, temp_dir):
        with pytest.raises(ConfigError):
            ProfileStore(temp_dir).load("../escape")
