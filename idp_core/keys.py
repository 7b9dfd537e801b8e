"""
Symmetric (HS256) signing for the mock providers.
Tokens carry a kid header matching the single key published at /.well-known/jwks.json.
The JWKS exposes the shared secret itself; acceptable for a local test harness only.
The published k is base64url without padding, not padded standard base64 as earlier
versions of this mock published; clients comparing raw k strings must decode it instead.
"""
import logging
import time

import jwt

from idp_core.config import Settings
from idp_core.errors import InvalidToken

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def secret_to_jwk(secret: str, kid: str) -> dict:
    """Export a shared secret as an 'oct' JWK (k is base64url without padding, RFC 7518 §6.4.1)."""
    k = jwt.utils.base64url_encode(secret.encode("utf-8"))
    return {
        "kty": "oct",
        "alg": ALGORITHM,
        "kid": kid,
        "use": "sig",
        "k": k.decode("ascii") if isinstance(k, bytes) else k,
    }


def get_jwks(settings: Settings) -> dict:
    return {"keys": [secret_to_jwk(settings.signing_secret, settings.key_id)]}


def build_id_token_claims(
    settings: Settings,
    subject: str,
    audience: str,
    profile: dict | None = None,
    now: int | None = None,
) -> dict:
    """Standard claims (iss, sub, aud, iat, exp) plus profile claims; exp is iat + token TTL."""
    issued_at = int(time.time()) if now is None else now
    claims = {
        "iss": settings.issuer,
        "sub": subject,
        "aud": audience,
        "iat": issued_at,
        "exp": issued_at + settings.token_ttl_seconds,
    }
    for name, value in (profile or {}).items():
        if value is not None:
            claims[name] = value
    return claims


def sign_token(settings: Settings, claims: dict) -> str:
    token = jwt.encode(
        claims,
        settings.signing_secret,
        algorithm=ALGORITHM,
        headers={"kid": settings.key_id, "typ": "JWT"},
    )
    if isinstance(token, bytes):
        token = token.decode("utf-8")
    return token


def issue_id_token(
    settings: Settings,
    subject: str,
    audience: str,
    profile: dict | None = None,
    now: int | None = None,
) -> str:
    return sign_token(settings, build_id_token_claims(settings, subject, audience, profile, now))


def verify_token(settings: Settings, token: str) -> dict:
    """
    Verify signature, expiry and issuer with the signing secret. Audience is not checked (the same
    token is presented as access token). Raises InvalidToken on any failure.
    """
    try:
        return jwt.decode(
            token,
            settings.signing_secret,
            algorithms=[ALGORITHM],
            issuer=settings.issuer,
            options={"verify_aud": False, "require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token expired")
    except jwt.InvalidTokenError as e:
        logger.debug("Token verification failed: %s", e)
        raise InvalidToken()
