"""
Galaksion API - Token lifecycle (login, refresh, persisted expiry)
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import requests

from utils.logging_setup import get_logger
from utils.time_utils import TOKEN_EXPIRY_FORMAT, parse_datetime
from utils.galaksion_api.core import AUTH_URL, REFRESH_URL, _headers, _send_request
from utils.galaksion_api.exceptions import AuthError, GalaksionError

logger = get_logger(service="galaksion_api", function="token")

# Server-side lifetime is about 7h; stored expiry keeps a one minute margin on top
TOKEN_LIFETIME = timedelta(hours=7, minutes=1)

TOKEN_KEY = "token"
TOKEN_EXPIRED_KEY = "token_expired"


@dataclass
class AuthResult:
    """Outcome of a token request; check `ok` before using `token`"""
    token: Optional[str] = None
    expires_at: Optional[datetime] = None
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.token)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenManager:
    """
    Obtains and refreshes the bearer token.

    The config store is the only place the credential lives between runs:
    `get_token()` reads it on every call and a successful refresh writes
    both the token and its expiry back.
    """

    def __init__(self, config_store, session=None, log_sink=None):
        self.config_store = config_store
        self.session = session or requests.Session()
        self.log_sink = log_sink

    def _write_log(self, message: str):
        if self.log_sink is not None:
            self.log_sink.write(message)

    def _fail(self, message: str, cause: Exception = None) -> AuthResult:
        error = AuthError(message)
        if cause is not None:
            error.__cause__ = cause
        logger.error(f"[ERROR] {message}")
        self._write_log(f"⚠️ {message}")
        return AuthResult(error=error)

    def get_token(self) -> str:
        return self.config_store.get(TOKEN_KEY) or ""

    def get_expires_at(self) -> Optional[datetime]:
        value = self.config_store.get(TOKEN_EXPIRED_KEY)
        try:
            expires_at = parse_datetime(value)
        except (TypeError, ValueError):
            logger.warning(f"Stored token expiry is not a date: {value!r}")
            return None
        if expires_at is not None and expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at

    def is_token_expired(self, now: datetime = None) -> bool:
        """Advisory check against the stored expiry; a missing token or expiry counts as expired"""
        if not self.get_token():
            return True
        expires_at = self.get_expires_at()
        if expires_at is None:
            return True
        return (now or _utc_now()) >= expires_at

    def store_token(self, token: str, now: datetime = None) -> datetime:
        """Persist a token together with its expiry (now + 7h01m)"""
        expires_at = (now or _utc_now()) + TOKEN_LIFETIME
        self.config_store.set(TOKEN_KEY, token)
        self.config_store.set(TOKEN_EXPIRED_KEY, expires_at.strftime(TOKEN_EXPIRY_FORMAT))
        return expires_at

    def generate_token(self, email: str, password: str) -> AuthResult:
        """
        Log in with email/password.

        Nothing is persisted here; the caller decides whether to store the token.
        """
        if not email or not password:
            return self._fail("Email and password are required to generate a token")

        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        try:
            result = _send_request(
                self.session, "POST", AUTH_URL,
                headers=headers,
                body={"email": email, "password": password},
            )
        except GalaksionError as e:
            return self._fail(f"Token request failed: {e}", e)

        if isinstance(result, dict) and result.get("token"):
            logger.info("[OK] Token received")
            self._write_log("Token received. ✅")
            return AuthResult(token=result["token"])

        message = result.get("message") if isinstance(result, dict) else None
        return self._fail(message or "Authentication failed")

    def refresh_token(self, current_token: str = None, now: datetime = None) -> AuthResult:
        """
        Exchange the current token for a new one.

        On success the new token and its expiry are written to the config store;
        on failure stored state is left as it was.
        """
        current_token = current_token or self.get_token()
        if not current_token:
            return self._fail("No token to refresh")

        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        headers.update(_headers(current_token))
        try:
            result = _send_request(self.session, "POST", REFRESH_URL, headers=headers)
        except GalaksionError as e:
            return self._fail(f"Token refresh failed: {e}", e)

        if isinstance(result, dict) and result.get("token"):
            expires_at = self.store_token(result["token"], now=now)
            logger.info(f"[OK] Token refreshed, valid until {expires_at.strftime(TOKEN_EXPIRY_FORMAT)}")
            self._write_log("Token refreshed. ✅")
            return AuthResult(token=result["token"], expires_at=expires_at)

        message = result.get("message") if isinstance(result, dict) else None
        return self._fail(message or "Token refresh failed")

    def ensure_token(self, email: str = None, password: str = None) -> AuthResult:
        """
        Make sure a usable token is stored before a run.

        An unexpired token is kept; an expired one is refreshed, and when that
        fails and credentials are given a new token is generated and stored.
        """
        if not self.is_token_expired():
            return AuthResult(token=self.get_token(), expires_at=self.get_expires_at())

        if self.get_token():
            result = self.refresh_token()
            if result.ok:
                return result

        if email and password:
            result = self.generate_token(email, password)
            if result.ok:
                expires_at = self.store_token(result.token)
                return AuthResult(token=result.token, expires_at=expires_at)
            return result

        return self._fail("Token expired and no credentials to generate a new one")
