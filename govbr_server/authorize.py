"""
Simulated Gov.br login.
GET /govbr/authorize: validate client_id, show login form. POST /govbr/login: issue code, redirect.
"""
import html
import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from idp_core.code_store import AuthorizationCodeStore, get_code_store
from idp_core.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter()


def _invalid_client_page() -> HTMLResponse:
    return HTMLResponse("<h1>Invalid request</h1><p>Unknown client_id.</p>", status_code=400)


def _login_page(client_id: str, redirect_uri: str, state: str | None, error: str | None = None) -> str:
    def e(s: str | None) -> str:
        return html.escape(s or "")

    error_html = f'<p style="color:red;">{e(error)}</p>' if error else ""
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>gov.br - Log in</title></head>
<body>
  <h1>gov.br</h1>
  <p>Identify yourself to continue to <strong>{e(client_id)}</strong>.</p>
  {error_html}
  <form method="post" action="/govbr/login">
    <input type="hidden" name="client_id" value="{e(client_id)}"/>
    <input type="hidden" name="redirect_uri" value="{e(redirect_uri)}"/>
    <input type="hidden" name="state" value="{e(state)}"/>
    <label>CPF or username: <input type="text" name="username" required/></label><br/>
    <button type="submit">Log in</button>
  </form>
</body>
</html>"""


@router.get("/govbr/authorize", response_class=HTMLResponse)
def authorize_get(
    client_id: str | None = None,
    redirect_uri: str | None = None,
    state: str | None = None,
    response_type: str | None = None,
    scope: str | None = None,
    settings: Settings = Depends(get_settings),
):
    """Authorization endpoint. Unknown client_id -> 400; otherwise the login form."""
    logger.info(
        "Authorization request: client_id=%s redirect_uri=%s response_type=%s scope=%s",
        client_id,
        redirect_uri,
        response_type,
        scope,
    )
    if client_id != settings.client_id:
        logger.warning("Rejected authorization request for client_id=%s", client_id)
        return _invalid_client_page()
    return HTMLResponse(_login_page(client_id, redirect_uri or settings.redirect_uri, state))


@router.post("/govbr/login")
def login(
    username: str = Form(""),
    client_id: str = Form(""),
    redirect_uri: str = Form(""),
    state: str = Form(""),
    settings: Settings = Depends(get_settings),
    store: AuthorizationCodeStore = Depends(get_code_store),
):
    """
    Accept any non-empty username as the authenticated user (no password check).
    Issues a code bound to client_id and redirects to redirect_uri?code=...&state=...
    """
    if client_id != settings.client_id:
        logger.warning("Rejected login for client_id=%s", client_id)
        return _invalid_client_page()

    target = redirect_uri or settings.redirect_uri
    username = username.strip()
    if not username:
        return HTMLResponse(_login_page(client_id, target, state, error="Username is required."), status_code=400)

    record = store.issue(client_id=client_id, redirect_uri=target, subject=username)
    logger.info("Simulated Gov.br login for user=%s client_id=%s", username, client_id)

    params = {"code": record.code}
    if state:
        params["state"] = state
    return RedirectResponse(url=f"{target}?{urlencode(params)}", status_code=302)
