"""
Gov.br mock identity provider plus a simulated Tableau client in one process.
Provider: /govbr/authorize, /govbr/login, /govbr/token, /govbr/userinfo, discovery, JWKS.
Client: /, /auth/openid/login, /auth/callback, /exchange-token.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from govbr_server.authorize import router as authorize_router
from govbr_server.config import load_settings
from govbr_server.tableau_client import router as tableau_router
from govbr_server.token_endpoint import router as token_router
from govbr_server.userinfo import router as userinfo_router
from idp_core.code_store import AuthorizationCodeStore
from idp_core.config import Settings
from idp_core.errors import install_error_handlers
from idp_core.logging_config import configure_logging
from idp_core.well_known import build_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings = app.state.settings
    logger.info("Gov.br mock running at %s", settings.issuer)
    logger.info("Discovery endpoint: %s", settings.discovery_url)
    yield


def create_app(settings: Settings | None = None, store: AuthorizationCodeStore | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="Gov.br mock IdP", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.code_store = store if store is not None else AuthorizationCodeStore(settings.code_ttl_seconds)
    install_error_handlers(app)

    app.include_router(tableau_router, tags=["tableau"])
    app.include_router(authorize_router, tags=["authorize"])
    app.include_router(token_router, tags=["token"])
    app.include_router(userinfo_router, tags=["userinfo"])
    app.include_router(
        build_router(authorize_path="/govbr/authorize", token_path="/govbr/token", userinfo_path="/govbr/userinfo"),
        tags=["well-known"],
    )

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": settings.service_name,
            "message": "Gov.br mock is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "govbr_server.main:app",
        host="0.0.0.0",
        port=app.state.settings.port,
    )
