"""
UserInfo endpoint (GET /govbr/userinfo). Bearer token signed by this server required.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from idp_core.config import Settings, get_settings
from idp_core.errors import InvalidToken, MissingToken
from idp_core.keys import verify_token

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """No Authorization header -> missing_token; a header that is not 'Bearer <token>' -> invalid_token."""
    if credentials is None:
        if request.headers.get("Authorization"):
            raise InvalidToken("Bearer scheme required")
        raise MissingToken()
    return credentials.credentials


@router.get("/govbr/userinfo")
def userinfo(
    token: str = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings),
):
    """Return sub and name from the verified token."""
    claims = verify_token(settings, token)
    return {"sub": claims.get("sub"), "name": claims.get("name")}
