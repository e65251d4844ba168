"""
Config test fixtures - clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "DB_URL", "DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD",
        "DB_SSLMODE", "DB_SCHEMA", "DB_POOL_MIN", "DB_POOL_MAX", "DB_POOL_TIMEOUT",
        "USE_MANAGED_IDENTITY", "DB_MANAGED_IDENTITY_NAME",
        "SMS_ENABLED", "SMS_API_BASE_URL", "SMS_ACCOUNT_SID", "SMS_AUTH_TOKEN",
        "SMS_FROM_NUMBER", "SMS_TIMEOUT_SECONDS",
        "ENVIRONMENT", "LOG_LEVEL", "DEBUG_MODE",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
