"""Tests for environment-driven settings."""

import pytest

from poolreplay.services.config import Settings, DEFAULT_REPLAY_URL, DEFAULT_STREAM_URL

ENV_KEYS = ["PORT", "HOST", "TABLE_COUNT", "REPLAY_DELAY_MS", "FRESHNESS_WINDOW_MS",
            "STREAM_URL", "REPLAY_URL", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also removes anything load_dotenv() adds
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


class TestDefaults:
    def test_defaults(self):
        s = Settings.from_env(dotenv_path=None)
        assert s.port == 3000
        assert s.table_count == 10
        assert s.replay_delay_ms == 3000
        assert s.freshness_window_ms == 120_000
        assert s.stream_url == DEFAULT_STREAM_URL
        assert s.replay_url == DEFAULT_REPLAY_URL
        assert s.log_level == "INFO"

    def test_missing_dotenv_file_is_fine(self, tmp_path):
        s = Settings.from_env(dotenv_path=str(tmp_path / "nope.env"))
        assert s.port == 3000


class TestOverrides:
    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("TABLE_COUNT", "3")
        monkeypatch.setenv("REPLAY_DELAY_MS", "250")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = Settings.from_env(dotenv_path=None)
        assert (s.port, s.table_count, s.replay_delay_ms, s.log_level) == (8080, 3, 250, "DEBUG")

    def test_dotenv_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("TABLE_COUNT=4\nREPLAY_URL=http://clip\n")
        s = Settings.from_env(dotenv_path=str(env))
        assert s.table_count == 4
        assert s.replay_url == "http://clip"

    def test_process_env_beats_dotenv(self, tmp_path, monkeypatch):
        env = tmp_path / ".env"
        env.write_text("TABLE_COUNT=4\n")
        monkeypatch.setenv("TABLE_COUNT", "6")
        assert Settings.from_env(dotenv_path=str(env)).table_count == 6

    def test_blank_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("PORT", "  ")
        assert Settings.from_env(dotenv_path=None).port == 3000


class TestValidation:
    def test_non_integer_names_variable(self, monkeypatch):
        monkeypatch.setenv("TABLE_COUNT", "ten")
        with pytest.raises(ValueError, match="TABLE_COUNT"):
            Settings.from_env(dotenv_path=None)

    def test_zero_tables_rejected(self, monkeypatch):
        monkeypatch.setenv("TABLE_COUNT", "0")
        with pytest.raises(ValueError):
            Settings.from_env(dotenv_path=None)

    def test_negative_delay_rejected(self, monkeypatch):
        monkeypatch.setenv("REPLAY_DELAY_MS", "-5")
        with pytest.raises(ValueError):
            Settings.from_env(dotenv_path=None)
