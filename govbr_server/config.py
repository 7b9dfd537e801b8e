"""
Gov.br mock server configuration. GOVBR_* variables from environment (or .env).
Tokens are signed with GOVBR_SIGNING_SECRET, distinct from the client secret.
"""
from idp_core.config import Settings, env_bool, env_int, env_optional_int, env_str

SERVICE_NAME = "govbr_server"

DEFAULT_CLIENT_ID = "tableau-client"
DEFAULT_CLIENT_SECRET = "secret123"
DEFAULT_SIGNING_SECRET = "mock_secret"

# Scopes requested by the simulated Tableau login
DEFAULT_SCOPE = "openid profile"


def load_settings() -> Settings:
    port = env_int("PORT", 3000)
    issuer = env_str("GOVBR_ISSUER", f"http://localhost:{port}").rstrip("/")
    return Settings(
        issuer=issuer,
        client_id=env_str("GOVBR_CLIENT_ID", DEFAULT_CLIENT_ID),
        client_secret=env_str("GOVBR_CLIENT_SECRET", DEFAULT_CLIENT_SECRET),
        signing_secret=env_str("GOVBR_SIGNING_SECRET", DEFAULT_SIGNING_SECRET),
        redirect_uri=env_str("GOVBR_REDIRECT_URI", f"{issuer}/auth/callback"),
        port=port,
        service_name=SERVICE_NAME,
        code_ttl_seconds=env_optional_int("CODE_TTL_SECONDS"),
        strict_redirect_uri=env_bool("STRICT_REDIRECT_URI"),
        internal_base_url=env_str("GOVBR_INTERNAL_BASE_URL", f"http://localhost:{port}").rstrip("/"),
    )
