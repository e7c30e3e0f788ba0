"""
client.py — OpenAI-compatible client factory for the derived configuration.

The container talks to its provider through OPENAI_API_KEY / OPENAI_BASE_URL
once build_env_vars() has routed the gateway credentials.  This module builds
the same client from the derived mapping, so the preflight check exercises
exactly what the container will see.

Usage
-----
    from gateway_env.client import make_client

    client = make_client(build_env_vars(load_worker_env()))
    response = client.chat.completions.create(model=..., ...)
"""

from __future__ import annotations

from typing import Mapping

from openai import OpenAI


def make_client(env_vars: Mapping[str, str]) -> OpenAI:
    """Build and return an OpenAI-compatible client.

    Raises RuntimeError when no OPENAI_API_KEY was derived, which is the case
    for Anthropic-style routing.  A missing OPENAI_BASE_URL falls back to the
    SDK default endpoint.
    """
    api_key = env_vars.get("OPENAI_API_KEY")
    if not api_key:
        raise RuntimeError(
            "No OPENAI_API_KEY derived. Set AI_GATEWAY_API_KEY with an OpenAI route, or OPENAI_API_KEY."
        )
    return OpenAI(
        api_key=api_key,
        base_url=env_vars.get("OPENAI_BASE_URL"),  # None -> uses OpenAI default
    )
