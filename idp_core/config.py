"""
Settings shared by both mock providers.
Each server builds a Settings from its own environment variables (see eas_server/config.py
and govbr_server/config.py); values may also come from a .env file in the working directory.
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv
from fastapi import Request

load_dotenv()

# JWKS key id; the kid header of every signed token must match it
KEY_ID = "simulated-key"

# id_token / access_token lifetime (seconds)
TOKEN_TTL_SECONDS = 3600


@dataclass(frozen=True)
class Settings:
    issuer: str
    client_id: str
    client_secret: str
    signing_secret: str
    redirect_uri: str
    port: int = 3000
    service_name: str = "mock_idp"
    key_id: str = KEY_ID
    token_ttl_seconds: int = TOKEN_TTL_SECONDS
    # None keeps codes valid until exchanged
    code_ttl_seconds: int | None = None
    # Re-check redirect_uri at exchange time (off: codes are bound to client_id only)
    strict_redirect_uri: bool = False
    # Base URL for calls this process makes to itself (Gov.br /exchange-token helper)
    internal_base_url: str = ""
    # Placeholder identity used when the flow has no login step
    default_subject: str = "user123"
    default_name: str = "Usuário Gov.br Simulado"
    default_email: str = "usuario@gov.br"

    @property
    def discovery_url(self) -> str:
        return f"{self.issuer}/.well-known/openid-configuration"


def env_str(name: str, default: str) -> str:
    value = os.environ.get(name, "").strip()
    return value or default


def env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def env_optional_int(name: str) -> int | None:
    """Positive integer from env, or None when unset/empty/zero."""
    value = env_int(name, 0)
    return value if value > 0 else None


def env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


def get_settings(request: Request) -> Settings:
    """Dependency: settings of the app serving this request."""
    return request.app.state.settings
