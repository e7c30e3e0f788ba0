"""
env_vars.py — map worker configuration onto the gateway container's environment.

The worker is configured with one set of names (AI_GATEWAY_*, MOLTBOT_*,
DEV_MODE, ...) while the container process expects another (provider-specific
keys and base URLs, CLAWDBOT_*).  build_env_vars() is the single place where
that translation happens.

Functions
---------
normalize_base_url(url)
    Strip trailing slashes; an empty result counts as "not set".

resolve_provider(env)
    Decide whether requests are shaped for OpenAI or Anthropic.

build_env_vars(env)
    Return a fresh dict of container variables.  Never raises; absent or empty
    inputs simply produce no output key.
"""

from __future__ import annotations

import enum
import logging
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

WorkerEnv = Mapping[str, Optional[str]]


class Provider(str, enum.Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# worker name -> container name, copied verbatim when set
PASSTHROUGH_VARS: dict[str, str] = {
    "MOLTBOT_GATEWAY_TOKEN": "CLAWDBOT_GATEWAY_TOKEN",
    "DEV_MODE": "CLAWDBOT_DEV_MODE",
    "CLAWDBOT_BIND_MODE": "CLAWDBOT_BIND_MODE",
    "TELEGRAM_BOT_TOKEN": "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_DM_POLICY": "TELEGRAM_DM_POLICY",
    "DISCORD_BOT_TOKEN": "DISCORD_BOT_TOKEN",
    "DISCORD_DM_POLICY": "DISCORD_DM_POLICY",
    "SLACK_BOT_TOKEN": "SLACK_BOT_TOKEN",
    "SLACK_APP_TOKEN": "SLACK_APP_TOKEN",
    "CDP_SECRET": "CDP_SECRET",
    "WORKER_URL": "WORKER_URL",
}

OUTPUT_KEYS: frozenset[str] = frozenset(
    {
        "ANTHROPIC_API_KEY",
        "OPENAI_API_KEY",
        "AI_PROVIDER",
        "MODEL",
        "AI_GATEWAY_BASE_URL",
        "OPENAI_BASE_URL",
        "ANTHROPIC_BASE_URL",
        *PASSTHROUGH_VARS.values(),
    }
)


def normalize_base_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return url.rstrip("/") or None


def resolve_provider(env: WorkerEnv) -> Provider:
    """Explicit AI_PROVIDER=openai wins, then URL detection.

    A gateway URL ending in ``/openai`` or any direct OPENAI_BASE_URL also
    selects OpenAI; everything else is Anthropic-style.
    """
    gateway_url = normalize_base_url(env.get("AI_GATEWAY_BASE_URL"))
    openai_url = normalize_base_url(env.get("OPENAI_BASE_URL"))

    if env.get("AI_PROVIDER") == Provider.OPENAI.value:
        return Provider.OPENAI
    if gateway_url and gateway_url.endswith("/openai"):
        return Provider.OPENAI
    if openai_url:
        return Provider.OPENAI
    return Provider.ANTHROPIC


def build_env_vars(env: WorkerEnv) -> dict[str, str]:
    env_vars: dict[str, str] = {}

    gateway_url = normalize_base_url(env.get("AI_GATEWAY_BASE_URL"))
    openai_url = normalize_base_url(env.get("OPENAI_BASE_URL"))
    provider = resolve_provider(env)
    key_var = "OPENAI_API_KEY" if provider is Provider.OPENAI else "ANTHROPIC_API_KEY"
    url_var = "OPENAI_BASE_URL" if provider is Provider.OPENAI else "ANTHROPIC_BASE_URL"

    # Gateway key takes precedence over direct provider keys
    if gateway_key := env.get("AI_GATEWAY_API_KEY"):
        env_vars[key_var] = gateway_key

    for name in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY"):
        if not env_vars.get(name) and env.get(name):
            env_vars[name] = env[name]

    # start-up script in the container reads AI_PROVIDER to pick its config
    if env.get("AI_PROVIDER"):
        env_vars["AI_PROVIDER"] = env["AI_PROVIDER"]
    if env.get("MODEL"):
        env_vars["MODEL"] = env["MODEL"]

    if gateway_url:
        env_vars["AI_GATEWAY_BASE_URL"] = gateway_url
        env_vars[url_var] = gateway_url
    elif openai_url:
        env_vars["OPENAI_BASE_URL"] = openai_url
    elif env.get("ANTHROPIC_BASE_URL"):
        env_vars["ANTHROPIC_BASE_URL"] = env["ANTHROPIC_BASE_URL"]

    for source, target in PASSTHROUGH_VARS.items():
        if env.get(source):
            env_vars[target] = env[source]

    logger.debug("provider=%s, emitting %d vars: %s", provider.value, len(env_vars), sorted(env_vars))
    return env_vars
