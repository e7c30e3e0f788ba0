"""Tests for gateway_env.client.make_client (no requests are sent)."""

import pytest

from gateway_env.client import make_client


def test_client_uses_derived_key_and_url():
    client = make_client({"OPENAI_API_KEY": "gw-key", "OPENAI_BASE_URL": "https://x.example/openai"})
    assert client.api_key == "gw-key"
    assert str(client.base_url).rstrip("/") == "https://x.example/openai"


def test_anthropic_routing_has_no_client():
    with pytest.raises(RuntimeError):
        make_client({"ANTHROPIC_API_KEY": "gw-key"})
