"""
Authorization endpoint (GET /authorize). Simulates a completed Gov.br login: validates client_id,
issues a code and renders a page that sends code and state back to redirect_uri.
"""
import html
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from idp_core.code_store import AuthorizationCodeStore, get_code_store
from idp_core.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter()


def _login_success_page(code: str, redirect_uri: str, state: str | None) -> str:
    def e(s: str | None) -> str:
        return html.escape(s or "")

    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>GOV.BR login (simulated)</title></head>
<body onload="document.getElementById('continue').submit()">
  <h2>Login successful via GOV.BR (simulated)</h2>
  <p>User authenticated.</p>
  <p><b>Authorization code:</b> {e(code)}</p>
  <form id="continue" action="{e(redirect_uri)}" method="get">
    <input type="hidden" name="code" value="{e(code)}"/>
    <input type="hidden" name="state" value="{e(state)}"/>
    <button type="submit">Continue to Tableau</button>
  </form>
</body>
</html>"""


@router.get("/authorize", response_class=HTMLResponse)
def authorize(
    client_id: str | None = None,
    redirect_uri: str | None = None,
    state: str | None = None,
    settings: Settings = Depends(get_settings),
    store: AuthorizationCodeStore = Depends(get_code_store),
):
    """
    OAuth2 authorization endpoint. Unknown client_id -> 400, no code issued.
    Otherwise stores {client_id, redirect_uri} under a new code and returns an auto-submitting form.
    """
    logger.info("Authorization request: client_id=%s redirect_uri=%s", client_id, redirect_uri)
    if client_id != settings.client_id:
        logger.warning("Rejected authorization request for client_id=%s", client_id)
        return HTMLResponse("<h1>Invalid request</h1><p>Invalid client_id.</p>", status_code=400)

    target = redirect_uri or settings.redirect_uri
    record = store.issue(client_id=client_id, redirect_uri=target)
    logger.info("Simulated login complete for client_id=%s", client_id)
    return HTMLResponse(_login_success_page(record.code, target, state))
