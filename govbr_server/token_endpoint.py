"""
Token endpoint (POST /govbr/token). The signed JWT is returned as both id_token and access_token,
so the access token can be presented to /govbr/userinfo.
"""
import logging

from fastapi import APIRouter, Depends, Request

from idp_core.code_store import AuthorizationCodeStore, get_code_store
from idp_core.config import Settings, get_settings
from idp_core.keys import issue_id_token
from idp_core.token_exchange import exchange_code, read_token_request, token_response

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/govbr/token")
async def token(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: AuthorizationCodeStore = Depends(get_code_store),
):
    token_request = await read_token_request(request)
    record = exchange_code(settings, store, token_request)

    subject = record.subject or settings.default_subject
    jwt_token = issue_id_token(
        settings,
        subject=subject,
        audience=record.client_id,
        profile={"name": subject},
    )
    logger.info("Issued tokens for client_id=%s sub=%s", record.client_id, subject)
    return token_response(jwt_token, jwt_token, settings.token_ttl_seconds)
