"""
OAuth/OIDC error responses for the token and userinfo endpoints.
Rendered as {"error": ..., "error_description": ...} (RFC 6749 §5.2) by oauth_error_handler.
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class OAuthError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "invalid_request"
    description = "Invalid request"
    bearer_challenge = False

    def __init__(self, description: str | None = None):
        self.error_description = description or self.description
        headers = {"WWW-Authenticate": "Bearer"} if self.bearer_challenge else None
        super().__init__(
            status_code=self.status_code,
            detail={"error": self.error, "error_description": self.error_description},
            headers=headers,
        )


class InvalidRequest(OAuthError):
    error = "invalid_request"
    description = "Invalid request"


class UnsupportedGrantType(OAuthError):
    error = "unsupported_grant_type"
    description = "Only authorization_code is supported"


class InvalidClient(OAuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "invalid_client"
    description = "Invalid client credentials"


class InvalidOrExpiredCode(OAuthError):
    error = "invalid_grant"
    description = "Invalid or expired code"


class MissingToken(OAuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "missing_token"
    description = "Authorization header missing"
    bearer_challenge = True


class InvalidToken(OAuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "invalid_token"
    description = "Token verification failed"
    bearer_challenge = True


async def oauth_error_handler(request: Request, exc: OAuthError) -> JSONResponse:
    logger.info(
        "%s %s -> %s %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.error,
        exc.error_description,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "error_description": exc.error_description},
        headers=exc.headers,
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OAuthError, oauth_error_handler)
