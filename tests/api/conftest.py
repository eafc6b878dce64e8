"""API test fixtures — FastAPI TestClient with a mocked SMTP transport.

The real transport is replaced through ``app.dependency_overrides`` so no
test ever opens a network connection.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from fahrschule.config import settings
from fahrschule.deps import get_transport
from fahrschule.main import app
from fahrschule.services.mailer import SMTPTransport


@pytest.fixture
def transport():
    mock = MagicMock(spec=SMTPTransport)
    mock.send.return_value = None
    return mock


@pytest.fixture
def client(transport):
    app.dependency_overrides[get_transport] = lambda: transport
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def fail_for():
    """Build a send side effect that fails for the given recipients."""

    def _make(*recipients: str):
        def _send(email):
            if email.to in recipients:
                raise ConnectionRefusedError(f"relay refused {email.to}")

        return _send

    return _make


@pytest.fixture
def operator_address() -> str:
    return settings.OPERATOR_EMAIL


@pytest.fixture
def internal_address() -> str:
    return settings.NOTIFICATION_EMAIL
