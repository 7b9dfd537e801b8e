"""
Token endpoint (POST /token). Exchanges a code for a signed id_token and a placeholder access token.
"""
import logging

from fastapi import APIRouter, Depends, Request

from idp_core.code_store import AuthorizationCodeStore, get_code_store
from idp_core.config import Settings, get_settings
from idp_core.keys import issue_id_token
from idp_core.token_exchange import exchange_code, read_token_request, token_response

logger = logging.getLogger(__name__)
router = APIRouter()

# Not a bearer credential; the EAS flow only needs the id_token
PLACEHOLDER_ACCESS_TOKEN = "fake_access_token"


@router.post("/token")
async def token(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: AuthorizationCodeStore = Depends(get_code_store),
):
    """authorization_code grant: client credentials, single-use code -> id_token for the placeholder user."""
    token_request = await read_token_request(request)
    record = exchange_code(settings, store, token_request)

    id_token = issue_id_token(
        settings,
        subject=settings.default_subject,
        audience=record.client_id,
        profile={"email": settings.default_email, "name": settings.default_name},
    )
    logger.info("Issued id_token for client_id=%s sub=%s", record.client_id, settings.default_subject)
    return token_response(id_token, PLACEHOLDER_ACCESS_TOKEN, settings.token_ttl_seconds)
