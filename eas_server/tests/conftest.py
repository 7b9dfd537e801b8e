"""
Fixtures for the EAS server: a fresh app (own settings and code store) per test.
"""
import pytest
from fastapi.testclient import TestClient

from eas_server.main import create_app
from idp_core.code_store import AuthorizationCodeStore
from idp_core.config import Settings

CLIENT_ID = "tableau-client"
CLIENT_SECRET = "supersecret"
ISSUER = "http://eas.test"


@pytest.fixture
def settings():
    return Settings(
        issuer=ISSUER,
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        signing_secret=CLIENT_SECRET,
        redirect_uri="http://cb",
        service_name="eas_server",
    )


@pytest.fixture
def store():
    return AuthorizationCodeStore()


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings, store))
