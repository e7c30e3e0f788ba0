"""
cli.py — ``gateway-env`` entry point.

Reads the worker configuration (process environment over .env), maps it with
build_env_vars() and either prints the result or runs a command with it.

  gateway-env                              # dotenv lines on stdout
  gateway-env --format json --redact       # inspect what would be passed on
  gateway-env --output container.env
  gateway-env -- ./start-moltbot.sh        # run with the derived environment

When a command is given, the child sees the current environment with every
worker input field removed, plus the derived variables.  Raw gateway
credentials therefore never reach the container under their worker names.
"""

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path

from gateway_env.config import LOG_LEVEL, WORKER_ENV_FIELDS, load_worker_env
from gateway_env.env_vars import build_env_vars, resolve_provider
from gateway_env.logging_config import setup_logging
from gateway_env.output import FORMATS, format_env_vars

logger = logging.getLogger(__name__)

EXIT_OUTPUT_FAILED = 1
EXIT_ENV_FILE_MISSING = 2
EXIT_COMMAND_NOT_RUNNABLE = 126
EXIT_COMMAND_NOT_FOUND = 127


def child_environ(env_vars, base_environ=None):
    environ = dict(os.environ if base_environ is None else base_environ)
    for name in WORKER_ENV_FIELDS:
        environ.pop(name, None)
    environ.update(env_vars)
    return environ


def run_command(command, env_vars):
    logger.info("Running %s with %d derived vars", command[0], len(env_vars))
    try:
        completed = subprocess.run(command, env=child_environ(env_vars), check=False)
    except FileNotFoundError:
        logger.error("command not found: %s", command[0])
        return EXIT_COMMAND_NOT_FOUND
    except OSError as e:
        logger.error("cannot run %s: %s", command[0], e)
        return EXIT_COMMAND_NOT_RUNNABLE
    logger.info("%s exited with %d", command[0], completed.returncode)
    return completed.returncode


def main(args):
    setup_logging(args.log_file, args.log_level)

    try:
        worker_env = load_worker_env(args.env_file)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_ENV_FILE_MISSING

    env_vars = build_env_vars(worker_env)
    logger.info(
        "provider=%s, %d of %d worker fields set → %d vars",
        resolve_provider(worker_env).value,
        len(worker_env),
        len(WORKER_ENV_FIELDS),
        len(env_vars),
    )
    logger.debug("emitting: %s", ", ".join(sorted(env_vars)))

    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if command:
        return run_command(command, env_vars)

    rendered = format_env_vars(env_vars, args.format, redact_secrets=args.redact)
    if args.output:
        out_path = Path(args.output)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(rendered + "\n" if rendered else "", encoding="utf-8")
        except OSError as e:
            logger.error("cannot write %s: %s", out_path, e)
            return EXIT_OUTPUT_FAILED
        logger.info("Wrote %s", out_path)
    elif rendered:
        print(rendered)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gateway-env",
        description="Map worker configuration onto the gateway container environment.",
    )
    parser.add_argument(
        "--env-file", type=str, default=None,
        help="Read worker fields from this .env file (process environment still wins)",
    )
    parser.add_argument("--format", choices=FORMATS, default="dotenv")
    parser.add_argument("--output", type=str, default=None, help="Write to a file instead of stdout")
    parser.add_argument("--redact", action="store_true", help="Mask API keys, tokens and secrets")
    parser.add_argument("--log-file", type=str, default=None)
    parser.add_argument("--log-level", type=str, default=LOG_LEVEL)
    parser.add_argument(
        "command", nargs=argparse.REMAINDER,
        help="Command to run with the derived environment (put it after --)",
    )
    return parser


def main_cli():
    """Console-script entry point (registered in pyproject.toml)."""
    sys.exit(main(build_parser().parse_args()))


if __name__ == "__main__":
    main_cli()
