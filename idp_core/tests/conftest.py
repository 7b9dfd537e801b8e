"""
Shared fixtures for idp_core tests.
"""
import pytest

from idp_core.code_store import AuthorizationCodeStore
from idp_core.config import Settings


@pytest.fixture
def settings():
    return Settings(
        issuer="http://issuer.test",
        client_id="tableau-client",
        client_secret="supersecret",
        signing_secret="signing-secret",
        redirect_uri="http://cb",
    )


@pytest.fixture
def store():
    return AuthorizationCodeStore()
