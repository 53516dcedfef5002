"""Tests for settings.py."""

import pytest

from history_store import HistoryStore
from settings import Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test from an empty directory with no YTH_* variables set."""
    for name in ("YTH_TOP_CHANNELS", "YTH_TOP_RECURRING", "YTH_TITLE_LENGTH",
                 "YTH_TITLED_WINDOW", "YTH_URL_WINDOW", "YTH_RECENT_LIMIT", "YTH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_values(self):
        s = Settings()
        assert s.top_channels == 10
        assert s.top_recurring == 15
        assert s.title_length == 45
        assert s.titled_window == 300
        assert s.url_window == 100
        assert s.recent_limit == 10

    def test_load_without_sources(self):
        assert load_settings() == Settings()


class TestYaml:
    def test_top_level_mapping(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("top_channels: 5\nlog_level: DEBUG\n")
        s = load_settings(str(path))
        assert s.top_channels == 5
        assert s.log_level == "DEBUG"
        assert s.top_recurring == 15

    def test_history_section(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("history:\n  url_window: 250\n")
        assert load_settings(str(path)).url_window == 250

    def test_default_path(self, tmp_path):
        (tmp_path / "settings.yaml").write_text("recent_limit: 3\n")
        assert load_settings().recent_limit == 3

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(str(path)) == Settings()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("no_such_setting: 1\n")
        with pytest.raises(TypeError):
            load_settings(str(path))

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_settings("does-not-exist.yaml")


class TestEnv:
    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("YTH_TOP_CHANNELS", "3")
        monkeypatch.setenv("YTH_LOG_LEVEL", "WARNING")
        s = load_settings()
        assert s.top_channels == 3
        assert s.log_level == "WARNING"

    def test_env_non_numeric_ignored(self, monkeypatch):
        monkeypatch.setenv("YTH_URL_WINDOW", "wide")
        assert load_settings().url_window == 100


class TestValidate:
    def test_non_positive_reset(self, tmp_path, caplog):
        path = tmp_path / "custom.yaml"
        path.write_text("top_channels: 0\ntitle_length: -4\n")
        s = load_settings(str(path))
        assert s.top_channels == 10
        assert s.title_length == 45
        assert "top_channels" in caplog.text

    def test_quoted_numbers_coerced(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("top_channels: '5'\nurl_window: \"150\"\n")
        s = load_settings(str(path))
        assert s.top_channels == 5
        assert s.url_window == 150

    def test_non_numeric_reset(self, tmp_path, caplog):
        path = tmp_path / "custom.yaml"
        path.write_text("top_recurring: lots\n")
        s = load_settings(str(path))
        assert s.top_recurring == 15
        assert "top_recurring" in caplog.text

    def test_wrong_type_after_construction(self, caplog):
        s = Settings(recent_limit="3").validate()
        assert s.recent_limit == 10
        assert "recent_limit" in caplog.text

    def test_store_parses_with_quoted_settings(self, tmp_path, sample_text):
        path = tmp_path / "custom.yaml"
        path.write_text("history:\n  top_channels: '1'\n  titled_window: '300'\n")
        store = HistoryStore(load_settings(str(path)))
        assert store.parse(sample_text)
        assert len(store.channel_stats) == 1
