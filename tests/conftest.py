import pytest

from gateway_env.config import WORKER_ENV_FIELDS


@pytest.fixture
def clean_environ(monkeypatch, tmp_path):
    """No worker fields in os.environ and no stray .env in the cwd."""
    for name in WORKER_ENV_FIELDS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
