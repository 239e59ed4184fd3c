from __future__ import annotations

from health_log.config import DEFAULT_PORT, load_settings
from health_log.skill.factory import build_skill


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HEALTH_LOG_STORE", "SQLite")
    monkeypatch.setenv("HEALTH_LOG_SQLITE_PATH", str(tmp_path / "log.db"))
    monkeypatch.setenv("HEALTH_LOG_LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "not-a-port")

    settings = load_settings()

    assert settings.store_backend == "sqlite"
    assert settings.log_level == "DEBUG"
    assert settings.port == DEFAULT_PORT
    assert build_skill(settings).store_name == "sqlite"
