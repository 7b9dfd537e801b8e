"""
Well-known endpoints: JWKS and OpenID Connect discovery.
Each server mounts build_router() with its own endpoint paths.
"""
from fastapi import APIRouter, Depends

from idp_core.config import Settings, get_settings
from idp_core.keys import ALGORITHM, get_jwks

JWKS_PATH = "/.well-known/jwks.json"
DISCOVERY_PATH = "/.well-known/openid-configuration"


def discovery_document(
    settings: Settings,
    authorize_path: str,
    token_path: str,
    userinfo_path: str | None = None,
) -> dict:
    base = settings.issuer
    document = {
        "issuer": base,
        "authorization_endpoint": f"{base}{authorize_path}",
        "token_endpoint": f"{base}{token_path}",
        "jwks_uri": f"{base}{JWKS_PATH}",
        "response_types_supported": ["code"],
        "subject_types_supported": ["public"],
        "id_token_signing_alg_values_supported": [ALGORITHM],
    }
    if userinfo_path:
        document["userinfo_endpoint"] = f"{base}{userinfo_path}"
        document["scopes_supported"] = ["openid", "profile"]
    return document


def build_router(authorize_path: str, token_path: str, userinfo_path: str | None = None) -> APIRouter:
    router = APIRouter()

    @router.get(JWKS_PATH)
    def jwks_json(settings: Settings = Depends(get_settings)):
        """JSON Web Key Set with the single symmetric signing key."""
        return get_jwks(settings)

    @router.get(DISCOVERY_PATH)
    def openid_configuration(settings: Settings = Depends(get_settings)):
        """OpenID Connect discovery document."""
        return discovery_document(settings, authorize_path, token_path, userinfo_path)

    return router
