"""
Authorization code exchange shared by POST /token (EAS) and POST /govbr/token (Gov.br).
Accepts form-encoded or JSON bodies; the Gov.br /exchange-token helper posts JSON.
"""
import logging
from dataclasses import dataclass

from fastapi import Request

from idp_core.client_auth import require_client_auth
from idp_core.code_store import AuthorizationCode, AuthorizationCodeStore
from idp_core.config import Settings
from idp_core.errors import InvalidOrExpiredCode, InvalidRequest, UnsupportedGrantType

logger = logging.getLogger(__name__)

GRANT_TYPE_AUTHORIZATION_CODE = "authorization_code"


@dataclass
class TokenRequest:
    grant_type: str | None = None
    code: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    authorization: str | None = None

    @classmethod
    def from_mapping(cls, data, authorization: str | None = None) -> "TokenRequest":
        def field(name: str) -> str | None:
            value = data.get(name)
            if value is None:
                return None
            return str(value)

        return cls(
            grant_type=field("grant_type"),
            code=field("code"),
            client_id=field("client_id"),
            client_secret=field("client_secret"),
            redirect_uri=field("redirect_uri"),
            authorization=authorization,
        )


async def read_token_request(request: Request) -> TokenRequest:
    """Parse the token request body (JSON or form) plus the Authorization header."""
    authorization = request.headers.get("Authorization")
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise InvalidRequest("Malformed JSON body")
        if not isinstance(data, dict):
            raise InvalidRequest("JSON body must be an object")
    else:
        data = await request.form()
    return TokenRequest.from_mapping(data, authorization=authorization)


def exchange_code(settings: Settings, store: AuthorizationCodeStore, token_request: TokenRequest) -> AuthorizationCode:
    """
    Authenticate the client, then consume the code. Returns the consumed record.
    Credential failures never touch the store.
    """
    if token_request.grant_type and token_request.grant_type != GRANT_TYPE_AUTHORIZATION_CODE:
        raise UnsupportedGrantType()

    client_id = require_client_auth(
        settings,
        token_request.authorization,
        token_request.client_id,
        token_request.client_secret,
    )

    if not token_request.code:
        raise InvalidRequest("code is required")

    record = store.consume(
        token_request.code,
        client_id=client_id,
        redirect_uri=token_request.redirect_uri,
        check_redirect_uri=settings.strict_redirect_uri,
    )
    if record is None:
        raise InvalidOrExpiredCode()

    if not settings.strict_redirect_uri and token_request.redirect_uri and token_request.redirect_uri != record.redirect_uri:
        logger.info(
            "redirect_uri differs from authorization request (not enforced): %s != %s",
            token_request.redirect_uri,
            record.redirect_uri,
        )
    return record


def token_response(id_token: str, access_token: str, expires_in: int) -> dict:
    return {
        "access_token": access_token,
        "id_token": id_token,
        "token_type": "Bearer",
        "expires_in": expires_in,
    }
