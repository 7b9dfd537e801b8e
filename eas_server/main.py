"""
EAS mock identity provider: discovery, JWKS, /authorize (auto-submitting form) and /token.
Run with `python -m eas_server.main` or `uvicorn eas_server.main:app`.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from eas_server.authorize import router as authorize_router
from eas_server.config import load_settings
from eas_server.token_endpoint import router as token_router
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
    logger.info("EAS mock running at %s", settings.issuer)
    logger.info("Discovery endpoint: %s", settings.discovery_url)
    yield


def create_app(settings: Settings | None = None, store: AuthorizationCodeStore | None = None) -> FastAPI:
    """Build an app with its own settings and code store (tests pass their own)."""
    settings = settings or load_settings()
    app = FastAPI(title="EAS mock IdP", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.code_store = store if store is not None else AuthorizationCodeStore(settings.code_ttl_seconds)
    install_error_handlers(app)

    app.include_router(authorize_router, tags=["authorize"])
    app.include_router(token_router, tags=["token"])
    app.include_router(build_router(authorize_path="/authorize", token_path="/token"), tags=["well-known"])

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": settings.service_name,
            "message": "EAS mock is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "eas_server.main:app",
        host="0.0.0.0",
        port=app.state.settings.port,
    )
