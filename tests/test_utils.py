from datetime import date

from todo_state import INITIAL_TODOS
from todo_state.settings import get_settings
from todo_state.utils import summarize


class TestSummarize:
    def test_counts_remaining(self):
        summary = summarize(INITIAL_TODOS, today=date(2019, 7, 10))
        assert summary == {
            "date": "July 10, 2019",
            "weekday": "Wednesday",
            "remaining": 2,
            "total": 4,
        }

    def test_accepts_iterator(self):
        summary = summarize(iter(INITIAL_TODOS[:1]), today=date(2019, 7, 10))
        assert summary["remaining"] == 0
        assert summary["total"] == 1


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("TODO_SEED", "LOG_LEVEL", "CORS_ALLOW_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.seed == "default"
        assert settings.log_level == "INFO"
        assert settings.cors_allow_origins == ["*"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TODO_SEED", "EMPTY")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        settings = get_settings()
        assert settings.seed == "empty"
        assert settings.log_level == "DEBUG"
        assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]

    def test_unknown_seed_falls_back(self, monkeypatch):
        monkeypatch.setenv("TODO_SEED", "bogus")
        assert get_settings().seed == "default"
