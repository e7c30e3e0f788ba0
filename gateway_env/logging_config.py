"""
logging_config.py — logging setup for the gateway_env package.

Each entry point calls setup_logging() once at startup.  After that, every
module uses logging.getLogger(__name__) normally.

Log format
----------
  2026-02-20 14:32:01 | INFO     | cli | provider=openai, 6 vars

A StreamHandler is attached to the root logger on stderr (stdout is reserved
for rendered variables).  When a log path is given, a DEBUG FileHandler is
attached as well.  Values of secrets are never logged, only their names.
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(module)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(level: str | int, default: int = logging.INFO) -> int:
    if isinstance(level, int):
        return level
    if not level:
        return default
    return getattr(logging, level.upper(), default)


def setup_logging(log_path: str | Path | None = None, level: str | int = "INFO") -> None:
    """
    Configure the root logger to write to stderr and, optionally, *log_path*.

    Calling it again (e.g. in tests) replaces the existing handlers.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any handlers added by a previous call or by basicConfig
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(resolve_log_level(level))
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
