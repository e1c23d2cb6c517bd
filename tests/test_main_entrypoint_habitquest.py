import logging
import sys

import pytest

import main as entry


@pytest.fixture(autouse=True)
def isolate(monkeypatch):
    import dotenv

    monkeypatch.setattr(dotenv, "load_dotenv", lambda *a, **k: False)
    monkeypatch.delenv("DISCORD_TOKEN", raising=False)
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    for name in ("habitquest.config", "habitquest.app.app"):
        monkeypatch.delitem(sys.modules, name, raising=False)
    import habitquest
    import habitquest.app

    monkeypatch.delattr(habitquest, "config", raising=False)
    monkeypatch.delattr(habitquest.app, "app", raising=False)

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("habitquest.config", "habitquest.app.app"):
        sys.modules.pop(name, None)


def test_main_returns_error_code_on_missing_token():
    assert entry.main() == 1


def test_main_starts_app_with_configured_log_level(monkeypatch, tmp_path):
    monkeypatch.setenv("DISCORD_TOKEN", "token")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DB_PATH", str(tmp_path / "hq.db"))

    import habitquest.app.app as app_mod

    started = []
    monkeypatch.setattr(app_mod, "main", started.append)

    assert entry.main() == 0
    assert len(started) == 1
    assert logging.getLogger().level == logging.DEBUG
