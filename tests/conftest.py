"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without a database, Azure credentials or an SMS provider.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'infrastructure', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent import crashes.

    Trigger modules build their singletons at import time, which reads
    configuration. Safe defaults keep imports working offline.
    """
    defaults = {
        "DB_HOST": "localhost",
        "DB_NAME": "census_test",
        "DB_USER": "census",
        "DB_PASSWORD": "census",
        "DB_SSLMODE": "disable",
        "DB_SCHEMA": "public",
        "SMS_ENABLED": "false",
        "ENVIRONMENT": "test",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop the cached AppConfig so monkeypatched env vars take effect."""
    from config import reset_config

    reset_config()
    yield
    reset_config()
