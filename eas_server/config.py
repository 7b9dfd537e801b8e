"""
EAS mock server configuration. Values from environment (or .env); defaults match the
Tableau integration test setup.
"""
from idp_core.config import Settings, env_bool, env_int, env_optional_int, env_str

SERVICE_NAME = "eas_server"

DEFAULT_CLIENT_ID = "tableau-client"
DEFAULT_CLIENT_SECRET = "supersecret"


def load_settings() -> Settings:
    """Build settings from PORT, EAS_BASE_URL, CLIENT_ID, CLIENT_SECRET and friends."""
    port = env_int("PORT", 3000)
    issuer = env_str("EAS_BASE_URL", f"http://localhost:{port}").rstrip("/")
    client_secret = env_str("CLIENT_SECRET", DEFAULT_CLIENT_SECRET)
    return Settings(
        issuer=issuer,
        client_id=env_str("CLIENT_ID", DEFAULT_CLIENT_ID),
        client_secret=client_secret,
        # The client secret doubles as the HS256 signing key unless overridden
        signing_secret=env_str("SIGNING_SECRET", client_secret),
        redirect_uri=env_str("REDIRECT_URI", "http://localhost:8080/auth/callback"),
        port=port,
        service_name=SERVICE_NAME,
        code_ttl_seconds=env_optional_int("CODE_TTL_SECONDS"),
        strict_redirect_uri=env_bool("STRICT_REDIRECT_URI"),
        internal_base_url=f"http://localhost:{port}",
    )
