"""
In-memory store for authorization codes (code -> client_id, redirect_uri, subject).
One store per app instance (app.state.code_store). Codes are single-use: consume() removes
the code under a lock, so concurrent exchanges of the same code yield at most one record.
"""
import logging
import secrets
import threading
import time
from dataclasses import dataclass

from fastapi import Request

logger = logging.getLogger(__name__)

# token_urlsafe(6) -> 8 URL-safe characters
CODE_BYTES = 6


@dataclass(frozen=True)
class AuthorizationCode:
    code: str
    client_id: str
    redirect_uri: str | None
    subject: str | None
    issued_at: float

    def expired(self, ttl_seconds: int | None, now: float | None = None) -> bool:
        if ttl_seconds is None:
            return False
        now = time.monotonic() if now is None else now
        return (now - self.issued_at) > ttl_seconds


class AuthorizationCodeStore:
    def __init__(self, ttl_seconds: int | None = None):
        self.ttl_seconds = ttl_seconds
        self._codes: dict[str, AuthorizationCode] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._codes)

    def __contains__(self, code: str) -> bool:
        return self.get(code) is not None

    def issue(self, client_id: str, redirect_uri: str | None, subject: str | None = None) -> AuthorizationCode:
        """Mint a fresh code not currently in the store and record it."""
        self.purge_expired()
        with self._lock:
            code = secrets.token_urlsafe(CODE_BYTES)
            while code in self._codes:
                code = secrets.token_urlsafe(CODE_BYTES)
            record = AuthorizationCode(
                code=code,
                client_id=client_id,
                redirect_uri=redirect_uri,
                subject=subject,
                issued_at=time.monotonic(),
            )
            self._codes[code] = record
        logger.debug("Issued code %s for client_id=%s", code, client_id)
        return record

    def get(self, code: str) -> AuthorizationCode | None:
        """Return the record without consuming it; expired codes are dropped and reported as absent."""
        with self._lock:
            record = self._codes.get(code)
            if record is not None and record.expired(self.ttl_seconds):
                del self._codes[code]
                return None
            return record

    def consume(
        self,
        code: str,
        client_id: str,
        redirect_uri: str | None = None,
        check_redirect_uri: bool = False,
    ) -> AuthorizationCode | None:
        """
        Remove and return the record if it exists, has not expired and belongs to client_id
        (and redirect_uri when check_redirect_uri). Otherwise return None; a code that
        belongs to another client or redirect_uri stays in the store.
        """
        with self._lock:
            record = self._codes.get(code)
            if record is None:
                return None
            if record.expired(self.ttl_seconds):
                del self._codes[code]
                logger.info("Code for client_id=%s expired before exchange", record.client_id)
                return None
            if record.client_id != client_id:
                return None
            if check_redirect_uri and record.redirect_uri != redirect_uri:
                return None
            del self._codes[code]
            return record

    def purge_expired(self) -> int:
        """Drop expired codes; returns how many were removed."""
        if self.ttl_seconds is None:
            return 0
        now = time.monotonic()
        with self._lock:
            expired = [c for c, r in self._codes.items() if r.expired(self.ttl_seconds, now)]
            for c in expired:
                del self._codes[c]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._codes.clear()


def get_code_store(request: Request) -> AuthorizationCodeStore:
    """Dependency: code store of the app serving this request."""
    return request.app.state.code_store
