"""
Client authentication for the token endpoint (RFC 6749 §2.3.1).
Credentials via client_id + client_secret in the body, or Authorization: Basic base64(client_id:client_secret).
There is exactly one registered client: the configured client_id / client_secret pair.
"""
import base64
import binascii
import logging
import secrets

from idp_core.config import Settings
from idp_core.errors import InvalidClient

logger = logging.getLogger(__name__)


def parse_basic(header_value: str | None) -> tuple[str, str] | None:
    """Parse 'Basic <base64(client_id:client_secret)>'. Returns (client_id, client_secret) or None."""
    if not header_value or not header_value.strip().lower().startswith("basic "):
        return None
    encoded = header_value.strip()[6:].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    if ":" not in decoded:
        return None
    client_id, _, client_secret = decoded.partition(":")
    return client_id.strip(), client_secret


def resolve_client_credentials(
    authorization: str | None,
    client_id_body: str | None,
    client_secret_body: str | None,
) -> tuple[str | None, str | None]:
    """
    Get (client_id, client_secret) from the request body or Authorization Basic.
    Body takes precedence when it carries both values.
    """
    if client_id_body and client_secret_body is not None:
        return client_id_body.strip(), client_secret_body
    basic = parse_basic(authorization)
    if basic:
        return basic
    if client_id_body:
        return client_id_body.strip(), client_secret_body
    return None, None


def credentials_match(settings: Settings, client_id: str | None, client_secret: str | None) -> bool:
    if not client_id or client_secret is None:
        return False
    id_ok = secrets.compare_digest(client_id.encode("utf-8"), settings.client_id.encode("utf-8"))
    secret_ok = secrets.compare_digest(client_secret.encode("utf-8"), settings.client_secret.encode("utf-8"))
    return id_ok and secret_ok


def require_client_auth(
    settings: Settings,
    authorization: str | None,
    client_id_body: str | None,
    client_secret_body: str | None,
) -> str:
    """Authenticate the configured client or raise InvalidClient (401). Returns the client_id."""
    client_id, client_secret = resolve_client_credentials(authorization, client_id_body, client_secret_body)
    if not client_id:
        raise InvalidClient("client_id is required")
    if not credentials_match(settings, client_id, client_secret):
        logger.warning("Rejected client credentials for client_id=%s", client_id)
        raise InvalidClient()
    return client_id
