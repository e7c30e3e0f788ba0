"""
preflight.py
------------
Pre-flight check before deploying the gateway. Resolves the worker
configuration exactly as the container would receive it and reports what is
missing or suspicious.

Checks
------
  C1  .env file        — exists (optional if the process env is complete)
  C2  Provider key     — an ANTHROPIC_API_KEY or OPENAI_API_KEY was derived
  C3  Config echo      — print the derived variables (secrets masked)
  C4  Chat platforms   — DM policies have tokens; Slack has both tokens
  C5  Gateway token    — CLAWDBOT_GATEWAY_TOKEN is set
  C6  Reachability     — OpenAI-routed config answers a one-line prompt

Usage
-----
    python tools/preflight.py [--env-file PATH] [--offline]
    gateway-env-preflight          # if installed via `pip install -e .`
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Bootstrap: make gateway_env importable when run from a checkout
# ---------------------------------------------------------------------------
_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(_ROOT))

from gateway_env.client import make_client  # noqa: E402
from gateway_env.config import ENV_FILE, SMOKE_TEST_MODEL, load_worker_env  # noqa: E402
from gateway_env.env_vars import Provider, build_env_vars, resolve_provider  # noqa: E402
from gateway_env.output import redact  # noqa: E402

# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------
_GREEN = "\033[32m"
_RED = "\033[31m"
_YELLOW = "\033[33m"
_BOLD = "\033[1m"
_RESET = "\033[0m"

OK = f"{_GREEN}✓ OK{_RESET}"
FAIL = f"{_RED}✗ FAIL{_RESET}"
WARN = f"{_YELLOW}~ WARN{_RESET}"
SKIP = f"{_YELLOW}· SKIP{_RESET}"

# (policy var, token var) per chat platform
_DM_POLICIES = [
    ("TELEGRAM_DM_POLICY", "TELEGRAM_BOT_TOKEN"),
    ("DISCORD_DM_POLICY", "DISCORD_BOT_TOKEN"),
]


def ok(msg: str) -> None:
    print(f"  {OK}   {msg}")


def fail(msg: str) -> None:
    print(f"  {FAIL}  {msg}")


def warn(msg: str) -> None:
    print(f"  {WARN}  {msg}")


def skip(msg: str) -> None:
    print(f"  {SKIP}  {msg}")


def _smoke_request(env_vars: dict[str, str]) -> str | None:
    """Send one tiny prompt. Returns an error string, or None on success."""
    try:
        client = make_client(env_vars)
        resp = client.chat.completions.create(
            model=env_vars.get("MODEL", SMOKE_TEST_MODEL),
            max_tokens=10,
            messages=[{"role": "user", "content": "Reply with exactly: OK"}],
        )
    except Exception as exc:
        return str(exc)
    if not resp.choices or not resp.choices[0].message.content:
        return "empty response"
    return None


def platform_warnings(env_vars: dict[str, str]) -> list[str]:
    warnings = []
    for policy_var, token_var in _DM_POLICIES:
        if policy_var in env_vars and token_var not in env_vars:
            warnings.append(f"{policy_var} is set but {token_var} is not — policy has no effect")
    if "SLACK_BOT_TOKEN" in env_vars and "SLACK_APP_TOKEN" not in env_vars:
        warnings.append("SLACK_BOT_TOKEN is set without SLACK_APP_TOKEN — socket mode needs both")
    if "SLACK_APP_TOKEN" in env_vars and "SLACK_BOT_TOKEN" not in env_vars:
        warnings.append("SLACK_APP_TOKEN is set without SLACK_BOT_TOKEN")
    return warnings


# ---------------------------------------------------------------------------
# Main preflight
# ---------------------------------------------------------------------------
def run_preflight(env_file: str | None = None, offline: bool = False) -> int:
    """Run all checks. Returns exit code (0 = all OK, otherwise number of FAILs)."""
    failures = 0
    env_path = Path(env_file or ENV_FILE)

    print(f"\n{_BOLD}Pre-flight check — gateway-env{_RESET}")
    print(f"{'─' * 52}")

    # ------------------------------------------------------------------
    # C1 — .env file
    # ------------------------------------------------------------------
    print("\n  C1  .env file")
    if env_path.is_file():
        ok(f"{env_path} found")
    elif env_file:
        fail(f"{env_path} not found")
        print(f"\n{_RED}{_BOLD}Aborting — fix the above errors first.{_RESET}\n")
        return 1
    else:
        warn(f"{env_path} not found — relying on the process environment only")

    worker_env = load_worker_env(env_file)
    env_vars = build_env_vars(worker_env)
    provider = resolve_provider(worker_env)

    # ------------------------------------------------------------------
    # C2 — Provider key
    # ------------------------------------------------------------------
    print("\n  C2  Provider credentials")
    key_var = "OPENAI_API_KEY" if provider is Provider.OPENAI else "ANTHROPIC_API_KEY"
    if key_var in env_vars:
        source = "gateway" if worker_env.get("AI_GATEWAY_API_KEY") else "direct"
        ok(f"{key_var} derived from {source} key — ends {redact(key_var, env_vars[key_var])}")
    elif "ANTHROPIC_API_KEY" in env_vars or "OPENAI_API_KEY" in env_vars:
        other = "ANTHROPIC_API_KEY" if provider is Provider.OPENAI else "OPENAI_API_KEY"
        warn(f"provider is {provider.value} but only {other} was derived")
    else:
        fail("no provider API key — set AI_GATEWAY_API_KEY, ANTHROPIC_API_KEY or OPENAI_API_KEY")
        failures += 1

    # ------------------------------------------------------------------
    # C3 — Config echo
    # ------------------------------------------------------------------
    print("\n  C3  Derived config")
    ok(f"provider        = {provider.value}")
    for key, value in sorted(env_vars.items()):
        ok(f"{key:<22} = {redact(key, value)}")

    # ------------------------------------------------------------------
    # C4 — Chat platforms
    # ------------------------------------------------------------------
    print("\n  C4  Chat platforms")
    platform_issues = platform_warnings(env_vars)
    for msg in platform_issues:
        warn(msg)
    configured = [p for p in ("TELEGRAM", "DISCORD", "SLACK") if f"{p}_BOT_TOKEN" in env_vars]
    if configured:
        ok(f"bot tokens for: {', '.join(p.lower() for p in configured)}")
    elif not platform_issues:
        warn("no chat platform configured — the gateway will only serve its web UI")

    # ------------------------------------------------------------------
    # C5 — Gateway token
    # ------------------------------------------------------------------
    print("\n  C5  Gateway token")
    if "CLAWDBOT_GATEWAY_TOKEN" in env_vars:
        ok("CLAWDBOT_GATEWAY_TOKEN set (from MOLTBOT_GATEWAY_TOKEN)")
    else:
        warn("MOLTBOT_GATEWAY_TOKEN not set — the gateway UI will not require a token")

    # ------------------------------------------------------------------
    # C6 — Reachability
    # ------------------------------------------------------------------
    print("\n  C6  API reachability")
    if offline:
        skip("Skipped — --offline")
    elif provider is not Provider.OPENAI:
        skip("Skipped — Anthropic-style routing is not probed")
    elif failures:
        skip("Skipped — C2 failed")
    elif "OPENAI_API_KEY" not in env_vars:
        skip("Skipped — OpenAI routing but no OPENAI_API_KEY derived")
    else:
        error = _smoke_request(env_vars)
        if error:
            fail(f"API error: {error[:120]}")
            failures += 1
        else:
            ok(f"{env_vars.get('OPENAI_BASE_URL', '(openai default)')} responded")

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------
    print(f"\n{'─' * 52}")
    if failures == 0:
        print(f"  {_GREEN}{_BOLD}All checks passed — ready to deploy.{_RESET}")
    else:
        print(f"  {_RED}{_BOLD}{failures} check(s) failed — fix the above before deploying.{_RESET}")
    print()
    return failures


def build_parser():
    parser = argparse.ArgumentParser(description="Check the derived gateway configuration.")
    parser.add_argument("--env-file", type=str, default=None)
    parser.add_argument("--offline", action="store_true", help="Skip the API reachability check")
    return parser


def main() -> None:
    args = build_parser().parse_args()
    sys.exit(run_preflight(args.env_file, args.offline))


if __name__ == "__main__":
    main()
