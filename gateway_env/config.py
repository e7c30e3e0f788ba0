"""
config.py — where worker configuration comes from.

Tool settings are read once at import time from the environment, falling back
to the default .env (python-dotenv).  Nothing is written into os.environ: the
worker fields are collected on demand by load_worker_env() so that callers can
point at a different .env file and the real process environment still wins.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

ENV_FILE: str = os.getenv("GATEWAY_ENV_FILE", ".env")

# Tool settings may live in the default .env, but are read without touching
# os.environ: only load_worker_env() decides where worker fields come from.
_file_settings = dotenv_values(ENV_FILE) if Path(ENV_FILE).is_file() else {}


def _setting(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        value = _file_settings.get(name)
    return value or default


LOG_LEVEL: str = _setting("GATEWAY_ENV_LOG_LEVEL", "INFO")
SMOKE_TEST_MODEL: str = _setting("GATEWAY_ENV_SMOKE_MODEL", "gpt-4o-mini")

# Every field the worker may be configured with.  Anything else in the
# environment is not ours and is left alone.
WORKER_ENV_FIELDS: tuple[str, ...] = (
    "AI_PROVIDER",
    "AI_GATEWAY_API_KEY",
    "AI_GATEWAY_BASE_URL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "MODEL",
    "MOLTBOT_GATEWAY_TOKEN",
    "DEV_MODE",
    "CLAWDBOT_BIND_MODE",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_DM_POLICY",
    "DISCORD_BOT_TOKEN",
    "DISCORD_DM_POLICY",
    "SLACK_BOT_TOKEN",
    "SLACK_APP_TOKEN",
    "CDP_SECRET",
    "WORKER_URL",
)


def load_worker_env(
    env_file: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """
    Collect the worker fields from *env_file* and *environ*.

    *environ* defaults to ``os.environ`` and wins over the file, the same way
    ``load_dotenv(override=False)`` behaves.  When *env_file* is None the
    default ENV_FILE is used if it exists; an explicitly named file that is
    missing raises FileNotFoundError.
    """
    if env_file is None:
        path = Path(ENV_FILE)
        file_values = dotenv_values(path) if path.is_file() else {}
    else:
        path = Path(env_file)
        if not path.is_file():
            raise FileNotFoundError(f"env file not found: {path}")
        file_values = dotenv_values(path)

    if environ is None:
        environ = os.environ

    worker_env: dict[str, str] = {}
    for name in WORKER_ENV_FIELDS:
        value = environ.get(name)
        if value is None:
            value = file_values.get(name)
        if value is not None:
            worker_env[name] = value
    return worker_env
