"""
Shared fixtures for envbind tests.
"""

import pytest

from envbind.coercers import register_coercer, unregister_coercer
from envbind.config import settings
from envbind.errors import CoercionError
from envbind.schemas import clear_schema_cache


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Start every test with no cached envbind settings."""
    monkeypatch.setattr(settings, "config", None)
    yield


def parse_port(raw):
    """Coercer for TCP ports used by the custom kind fixtures."""
    if not raw.isdigit():
        raise CoercionError(f"invalid port: {raw}")
    port = int(raw)
    if not 1 <= port <= 65535:
        raise CoercionError(f"port out of range: {raw}")
    return port


@pytest.fixture
def port_kind():
    """Register a 'port' kind for the duration of a test."""
    register_coercer("port", parse_port)
    yield "port"
    unregister_coercer("port")
    clear_schema_cache()
