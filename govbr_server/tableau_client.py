"""
Same-process simulation of the Tableau side of the login.
GET /, /auth/openid/login, /auth/callback; POST /exchange-token trades the code at /govbr/token over HTTP.
"""
import html
import json
import logging
import secrets
from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from govbr_server.config import DEFAULT_SCOPE
from idp_core.config import Settings, get_settings
from idp_core.token_exchange import GRANT_TYPE_AUTHORIZATION_CODE

logger = logging.getLogger(__name__)
router = APIRouter()


def _page(title: str, body: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(
        f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{html.escape(title)}</title></head>
<body>
{body}
  <p><a href="/">Home</a></p>
</body>
</html>""",
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
def home():
    """Start page standing in for Tableau's sign-in screen."""
    return _page(
        "Tableau (simulated)",
        """  <h1>Tableau (simulated)</h1>
  <p><a href="/auth/openid/login">Sign in with gov.br</a></p>""",
    )


@router.get("/auth/openid/login")
def openid_login(settings: Settings = Depends(get_settings)):
    """Redirect into the Gov.br authorization endpoint, as Tableau would."""
    params = {
        "client_id": settings.client_id,
        "redirect_uri": settings.redirect_uri,
        "response_type": "code",
        "scope": DEFAULT_SCOPE,
        "state": secrets.token_urlsafe(16),
    }
    return RedirectResponse(url=f"{settings.issuer}/govbr/authorize?{urlencode(params)}", status_code=302)


@router.get("/auth/callback", response_class=HTMLResponse)
def callback(code: str | None = None, state: str | None = None):
    """Show the received code with a button to exchange it manually."""
    if not code:
        return _page("Error", "  <h1>Error</h1>\n  <p>Missing code parameter.</p>", status_code=400)
    c = html.escape(code)
    state_line = f"\n  <p>State: <code>{html.escape(state)}</code></p>" if state else ""
    return _page(
        "Login success",
        f"""  <h2>Login successful via GOV.BR (simulated)</h2>
  <p>Authorization code received: <b>{c}</b></p>{state_line}
  <form action="/exchange-token" method="post">
    <input type="hidden" name="code" value="{c}"/>
    <button type="submit">Exchange for token</button>
  </form>""",
    )


@router.post("/exchange-token", response_class=HTMLResponse)
def exchange_token(code: str = Form(...), settings: Settings = Depends(get_settings)):
    """
    Exchange the code at this server's own /govbr/token with the configured client credentials
    and render the JSON token response.
    """
    try:
        r = httpx.post(
            f"{settings.internal_base_url}/govbr/token",
            json={
                "code": code,
                "client_id": settings.client_id,
                "client_secret": settings.client_secret,
                "redirect_uri": settings.redirect_uri,
                "grant_type": GRANT_TYPE_AUTHORIZATION_CODE,
            },
            headers={"Accept": "application/json"},
            timeout=10.0,
        )
    except httpx.HTTPError as e:
        logger.warning("Token exchange request failed: %s", e)
        return _page(
            "Token error",
            f"  <h1>Token exchange failed</h1>\n  <p>{html.escape(str(e))}</p>",
            status_code=502,
        )

    try:
        data = r.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        data = {"error": "invalid_response", "error_description": r.text[:500]}

    if r.status_code != 200:
        err_desc = data.get("error_description") or data.get("error") or "Token exchange failed"
        return _page(
            "Token error",
            f"  <h1>Token exchange failed</h1>\n  <p>{html.escape(str(err_desc))}</p>",
            status_code=r.status_code,
        )

    body = html.escape(json.dumps(data, indent=2))
    return _page("Token received", f"  <h3>Token obtained successfully!</h3>\n  <pre>{body}</pre>")
