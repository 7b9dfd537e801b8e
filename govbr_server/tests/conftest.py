"""
Fixtures for the Gov.br server: a fresh app (own settings and code store) per test.
"""
import pytest
from fastapi.testclient import TestClient

from govbr_server.main import create_app
from idp_core.code_store import AuthorizationCodeStore
from idp_core.config import Settings

ISSUER = "http://govbr.test"


@pytest.fixture
def settings():
    return Settings(
        issuer=ISSUER,
        client_id="tableau-client",
        client_secret="secret123",
        signing_secret="mock_secret",
        redirect_uri=f"{ISSUER}/auth/callback",
        service_name="govbr_server",
        internal_base_url="http://localhost:3000",
    )


@pytest.fixture
def store():
    return AuthorizationCodeStore()


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings, store))
