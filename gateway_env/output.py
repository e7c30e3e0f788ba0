"""
output.py — render derived variables for humans and for other processes.

Functions
---------
is_secret(key)
    True for API keys, tokens and shared secrets.

redact(key, value)
    Mask a secret down to its last four characters.

format_env_vars(env_vars, fmt, redact_secrets)
    Render a mapping as dotenv lines, shell exports or JSON.  Keys are sorted
    so the output is byte-stable for identical input.
"""

from __future__ import annotations

import json
import re
import shlex
from typing import Mapping

FORMATS = ("dotenv", "shell", "json")

_SECRET_SUFFIXES = ("_API_KEY", "_TOKEN", "_SECRET")
_SAFE_DOTENV_VALUE = re.compile(r"^[A-Za-z0-9_./:@%+,-]*$")


def is_secret(key: str) -> bool:
    return key.endswith(_SECRET_SUFFIXES)


def redact(key: str, value: str) -> str:
    if not is_secret(key):
        return value
    if len(value) <= 8:
        return "…"
    return f"…{value[-4:]}"


def _dotenv_value(value: str) -> str:
    if _SAFE_DOTENV_VALUE.match(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_env_vars(
    env_vars: Mapping[str, str],
    fmt: str = "dotenv",
    redact_secrets: bool = False,
) -> str:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format '{fmt}'. Use one of {', '.join(FORMATS)}.")

    items = sorted(env_vars.items())
    if redact_secrets:
        items = [(k, redact(k, v)) for k, v in items]

    if fmt == "json":
        return json.dumps(dict(items), indent=2, ensure_ascii=False)
    if fmt == "shell":
        lines = [f"export {k}={shlex.quote(v)}" for k, v in items]
    else:
        lines = [f"{k}={_dotenv_value(v)}" for k, v in items]
    return "\n".join(lines)
