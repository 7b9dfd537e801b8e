"""
Tests for the EAS mock: discovery, JWKS, /authorize and /token.
"""
import base64
import re
from dataclasses import replace

import jwt
from fastapi.testclient import TestClient

from eas_server.main import create_app
from eas_server.token_endpoint import PLACEHOLDER_ACCESS_TOKEN

CLIENT_ID = "tableau-client"
CLIENT_SECRET = "supersecret"
ISSUER = "http://eas.test"

_CODE_RE = re.compile(r'name="code" value="([^"]+)"')


def _authorize(client, state="xyz", redirect_uri="http://cb"):
    r = client.get("/authorize", params={"client_id": CLIENT_ID, "redirect_uri": redirect_uri, "state": state})
    assert r.status_code == 200
    match = _CODE_RE.search(r.text)
    assert match, r.text
    return match.group(1)


def _token(client, code, secret=CLIENT_SECRET, **extra):
    data = {"code": code, "client_id": CLIENT_ID, "client_secret": secret, "redirect_uri": "http://cb"}
    data.update(extra)
    return client.post("/token", data=data)


# --- discovery / jwks / health ---


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "eas_server"
    assert "timestamp" in data


def test_openid_configuration(client):
    r = client.get("/.well-known/openid-configuration")
    assert r.status_code == 200
    assert r.json() == {
        "issuer": ISSUER,
        "authorization_endpoint": f"{ISSUER}/authorize",
        "token_endpoint": f"{ISSUER}/token",
        "jwks_uri": f"{ISSUER}/.well-known/jwks.json",
        "response_types_supported": ["code"],
        "subject_types_supported": ["public"],
        "id_token_signing_alg_values_supported": ["HS256"],
    }


def test_jwks_publishes_client_secret(client):
    r = client.get("/.well-known/jwks.json")
    assert r.status_code == 200
    keys = r.json()["keys"]
    assert len(keys) == 1
    assert keys[0]["kty"] == "oct"
    assert keys[0]["alg"] == "HS256"
    assert keys[0]["kid"] == "simulated-key"
    assert jwt.utils.base64url_decode(keys[0]["k"]) == CLIENT_SECRET.encode()


# --- /authorize ---


def test_authorize_unknown_client(client, store):
    r = client.get("/authorize", params={"client_id": "evil", "redirect_uri": "http://cb", "state": "s"})
    assert r.status_code == 400
    assert "invalid" in r.text.lower()
    assert len(store) == 0


def test_authorize_missing_client(client, store):
    r = client.get("/authorize", params={"redirect_uri": "http://cb"})
    assert r.status_code == 400
    assert len(store) == 0


def test_authorize_renders_auto_submit_form(client, store):
    r = client.get("/authorize", params={"client_id": CLIENT_ID, "redirect_uri": "http://cb", "state": "xyz"})
    assert r.status_code == 200
    assert 'action="http://cb"' in r.text
    assert 'name="state" value="xyz"' in r.text
    assert ".submit()" in r.text
    code = _CODE_RE.search(r.text).group(1)
    record = store.get(code)
    assert record.client_id == CLIENT_ID
    assert record.redirect_uri == "http://cb"


def test_authorize_escapes_state(client):
    r = client.get(
        "/authorize",
        params={"client_id": CLIENT_ID, "redirect_uri": "http://cb", "state": '"><script>alert(1)</script>'},
    )
    assert r.status_code == 200
    assert "<script>alert(1)</script>" not in r.text


def test_authorize_issues_unique_codes(client):
    codes = {_authorize(client) for _ in range(50)}
    assert len(codes) == 50


# --- /token ---


def test_end_to_end(client):
    code = _authorize(client)
    r = _token(client, code)
    assert r.status_code == 200
    data = r.json()
    assert data["token_type"] == "Bearer"
    assert data["expires_in"] == 3600
    assert data["access_token"] == PLACEHOLDER_ACCESS_TOKEN
    claims = jwt.decode(data["id_token"], CLIENT_SECRET, algorithms=["HS256"], audience=CLIENT_ID)
    assert claims["sub"] == "user123"
    assert claims["iss"] == ISSUER
    assert claims["email"] == "usuario@gov.br"
    assert claims["name"] == "Usuário Gov.br Simulado"
    assert claims["exp"] == claims["iat"] + 3600
    assert jwt.get_unverified_header(data["id_token"])["kid"] == "simulated-key"


def test_code_is_single_use(client):
    code = _authorize(client)
    assert _token(client, code).status_code == 200
    for _ in range(2):
        r = _token(client, code)
        assert r.status_code == 400
        assert r.json()["error"] == "invalid_grant"
        assert "invalid or expired" in r.json()["error_description"].lower()


def test_wrong_secret_does_not_consume_code(client, store):
    code = _authorize(client)
    r = _token(client, code, secret="wrong")
    assert r.status_code == 401
    assert r.json()["error"] == "invalid_client"
    assert code in store
    assert _token(client, code).status_code == 200


def test_wrong_client_id(client):
    code = _authorize(client)
    r = client.post("/token", data={"code": code, "client_id": "other", "client_secret": CLIENT_SECRET})
    assert r.status_code == 401
    assert r.json()["error"] == "invalid_client"


def test_unknown_code(client):
    r = _token(client, "deadbeef")
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_grant"


def test_missing_code(client):
    r = client.post("/token", data={"client_id": CLIENT_ID, "client_secret": CLIENT_SECRET})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_request"


def test_unsupported_grant_type(client):
    code = _authorize(client)
    r = _token(client, code, grant_type="client_credentials")
    assert r.status_code == 400
    assert r.json()["error"] == "unsupported_grant_type"


def test_token_accepts_json_body(client):
    code = _authorize(client)
    r = client.post(
        "/token",
        json={"code": code, "client_id": CLIENT_ID, "client_secret": CLIENT_SECRET, "grant_type": "authorization_code"},
    )
    assert r.status_code == 200
    assert r.json()["token_type"] == "Bearer"


def test_token_accepts_basic_auth(client):
    code = _authorize(client)
    basic = base64.b64encode(f"{CLIENT_ID}:{CLIENT_SECRET}".encode()).decode()
    r = client.post(
        "/token",
        data={"code": code, "grant_type": "authorization_code", "redirect_uri": "http://cb"},
        headers={"Authorization": f"Basic {basic}"},
    )
    assert r.status_code == 200


def test_token_malformed_json(client):
    r = client.post("/token", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_request"


def test_token_json_body_not_utf8(client):
    r = client.post("/token", content=b'{"code": "\xff\xfe"}', headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_request"


def test_redirect_uri_mismatch_allowed_by_default(client):
    code = _authorize(client, redirect_uri="http://cb")
    r = _token(client, code, redirect_uri="http://other")
    assert r.status_code == 200


def test_strict_redirect_uri(settings, store):
    client = TestClient(create_app(replace(settings, strict_redirect_uri=True), store))
    code = _authorize(client, redirect_uri="http://cb")
    r = _token(client, code, redirect_uri="http://other")
    assert r.status_code == 400
    assert _token(client, code, redirect_uri="http://cb").status_code == 200


def test_signing_secret_can_differ_from_client_secret(settings, store):
    secret = "a-different-signing-key"
    client = TestClient(create_app(replace(settings, signing_secret=secret), store))
    code = _authorize(client)
    id_token = _token(client, code).json()["id_token"]
    claims = jwt.decode(id_token, secret, algorithms=["HS256"], audience=CLIENT_ID)
    assert claims["sub"] == "user123"


def test_apps_do_not_share_codes(settings):
    first = TestClient(create_app(settings))
    second = TestClient(create_app(settings))
    code = _authorize(first)
    assert _token(second, code).status_code == 400
    assert _token(first, code).status_code == 200
