"""Tests for gateway_env.config.load_worker_env."""

import pytest

from gateway_env.config import WORKER_ENV_FIELDS, load_worker_env


def test_reads_known_fields_from_env_file(tmp_path):
    env_file = tmp_path / "worker.env"
    env_file.write_text(
        "AI_GATEWAY_API_KEY=gw-key\n"
        "TELEGRAM_BOT_TOKEN='123:abc'\n"
        "NOT_A_WORKER_FIELD=x\n"
    )
    result = load_worker_env(env_file, environ={})
    assert result == {"AI_GATEWAY_API_KEY": "gw-key", "TELEGRAM_BOT_TOKEN": "123:abc"}


def test_environment_wins_over_file(tmp_path):
    env_file = tmp_path / "worker.env"
    env_file.write_text("MODEL=from-file\nDEV_MODE=false\n")
    result = load_worker_env(env_file, environ={"MODEL": "from-env", "PATH": "/usr/bin"})
    assert result == {"MODEL": "from-env", "DEV_MODE": "false"}


def test_empty_environment_value_is_kept(tmp_path):
    env_file = tmp_path / "worker.env"
    env_file.write_text("WORKER_URL=https://worker.example\n")
    result = load_worker_env(env_file, environ={"WORKER_URL": ""})
    assert result == {"WORKER_URL": ""}


def test_missing_explicit_env_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_worker_env(tmp_path / "nope.env", environ={})


def test_default_env_file_is_optional(clean_environ):
    assert load_worker_env(environ={"CDP_SECRET": "s"}) == {"CDP_SECRET": "s"}


def test_default_env_file_is_used_when_present(clean_environ):
    (clean_environ / ".env").write_text("SLACK_APP_TOKEN=xapp-1\n")
    assert load_worker_env() == {"SLACK_APP_TOKEN": "xapp-1"}


def test_field_catalogue_has_no_duplicates():
    assert len(set(WORKER_ENV_FIELDS)) == len(WORKER_ENV_FIELDS)


def test_import_does_not_load_dotenv_into_environ(clean_environ, monkeypatch):
    import importlib
    import os

    import gateway_env.config as config

    monkeypatch.delenv("GATEWAY_ENV_LOG_LEVEL", raising=False)
    monkeypatch.delenv("GATEWAY_ENV_FILE", raising=False)
    (clean_environ / ".env").write_text("MODEL=from-default-dotenv\nGATEWAY_ENV_LOG_LEVEL=DEBUG\n")
    try:
        importlib.reload(config)
        assert "MODEL" not in os.environ
        assert "GATEWAY_ENV_LOG_LEVEL" not in os.environ
        assert config.LOG_LEVEL == "DEBUG"
    finally:
        monkeypatch.undo()
        importlib.reload(config)
