from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passkeep.core import config as core_config  # noqa: E402
from passkeep.core.config import ConfigError, load_settings  # noqa: E402

_ENV_KEYS = ("APP_ENV", "FILE_PATH", "SERVER_HOST", "SERVER_PORT", "RECORD_TYPES", "LOG_LEVEL", "PASSKEEP_CONFIG")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


def test_defaults_without_file(tmp_path):
    settings = load_settings(tmp_path / "missing.yaml")
    assert settings.file_path == "storage.json"
    assert settings.server_port == 8080
    assert settings.record_types == ("login",)
    assert settings.app_env == "dev"
    assert settings.log_level == "INFO"


def test_yaml_values(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "file_path: /tmp/vault.json\nserver_port: '9000'\nrecord_types: [login, email]\nlog_level: debug\n",
        encoding="utf-8",
    )
    settings = load_settings(cfg)
    assert settings.file_path == "/tmp/vault.json"
    assert settings.server_port == 9000
    assert settings.record_types == ("login", "email")
    assert settings.log_level == "DEBUG"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("server_port: 9000\nrecord_types: [login]\n", encoding="utf-8")
    monkeypatch.setenv("SERVER_PORT", "9100")
    monkeypatch.setenv("RECORD_TYPES", "login, email ,card")
    settings = load_settings(cfg)
    assert settings.server_port == 9100
    assert settings.record_types == ("login", "email", "card")


def test_bad_port_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.setenv("SERVER_PORT", "not-a-port")
    assert load_settings(tmp_path / "missing.yaml").server_port == 8080


@pytest.mark.parametrize("content", ["- just\n- a list\n", "key: [unclosed\n", "record_types: 5\n"])
def test_invalid_yaml_raises(tmp_path, content):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(cfg)


def test_get_settings_reads_passkeep_config(tmp_path, monkeypatch):
    cfg = tmp_path / "other.yaml"
    cfg.write_text("file_path: elsewhere.json\n", encoding="utf-8")
    monkeypatch.setenv("PASSKEEP_CONFIG", str(cfg))
    assert core_config.get_settings().file_path == "elsewhere.json"


def test_configure_logging_installs_single_handler():
    import logging

    from passkeep.core.logging import configure_logging

    app_logger = logging.getLogger("passkeep")
    previous = list(app_logger.handlers), app_logger.level
    try:
        configure_logging("debug")
        configure_logging("warning")
        assert len(app_logger.handlers) == 1
        assert app_logger.level == logging.WARNING
    finally:
        app_logger.handlers[:] = previous[0]
        app_logger.setLevel(previous[1])
