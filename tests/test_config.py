from pathlib import Path

import pytest

from clientparty import Config, Dispatcher


class TestConfig:
    def test_defaults(self):
        config = Config()

        assert config.user_agent.startswith("clientparty/")
        assert config.debug is False

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CLIENTPARTY_USER_AGENT", "agent/7")
        monkeypatch.setenv("CLIENTPARTY_DEBUG", "true")

        config = Config.from_env(dotenv=False)

        assert config.user_agent == "agent/7"
        assert config.debug is True

    @pytest.mark.parametrize("value", ["0", "false", "no", ""])
    def test_debug_falsy_values(self, monkeypatch: pytest.MonkeyPatch, value: str):
        monkeypatch.setenv("CLIENTPARTY_DEBUG", value)

        assert Config.from_env(dotenv=False).debug is False

    def test_from_dotenv_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        (tmp_path / ".env").write_text("CLIENTPARTY_USER_AGENT=from-dotenv/1\n")
        monkeypatch.chdir(tmp_path)

        assert Config.from_env().user_agent == "from-dotenv/1"

    def test_environment_wins_over_dotenv_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ):
        (tmp_path / ".env").write_text("CLIENTPARTY_USER_AGENT=from-dotenv/1\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CLIENTPARTY_USER_AGENT", "from-env/2")

        assert Config.from_env().user_agent == "from-env/2"

    def test_dispatcher_reads_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CLIENTPARTY_USER_AGENT", "agent/9")

        dispatcher = Dispatcher()

        assert dispatcher._config.user_agent == "agent/9"
