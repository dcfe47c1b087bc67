"""
Galaksion API - Core HTTP utilities and constants
"""
import random
import time
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

import requests

from utils.logging_setup import get_logger
from utils.galaksion_api.exceptions import ApiError, AuthError, ExpiryError, TransportError

logger = get_logger(service="galaksion_api")


# ===== Constants =====
REPORTING_BASE_URL = "https://ssp2-api.galaksion.com/"
MANAGEMENT_BASE_URL = "https://adv.clickadu.com/api/v1.0/"
AUTH_URL = "https://ssp2-api.galaksion.com/api/v1/auth"
REFRESH_URL = "https://ssp2-api.galaksion.com/jwt/refresh"

STATISTICS_PATH = "statistics"
EXPIRY_CODE = "406"
REQUEST_TIMEOUT_SECONDS = 30

BROWSER_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "Origin": "https://ssp-adv.galaksion.com",
    "Referer": "https://ssp-adv.galaksion.com/",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36"
    ),
    "x-ssp": "true",
}
CAMPAIGNS_REFERER = "https://adv.clickadu.com/campaigns"

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def generate_analytics_session() -> str:
    """Random 32-character lowercase hex id sent as x-analytics-session"""
    return "".join(random.choice("0123456789abcdef") for _ in range(32))


def _query_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_string(params: Optional[Dict[str, Any]]) -> str:
    """
    Serialize query parameters.

    Scalars become key=<percent-encoded value>, lists become repeated
    key[]=value pairs, None values are skipped.
    """
    if not params:
        return ""

    parts = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                parts.append(f"{key}[]={quote(_query_value(item), safe=_URI_COMPONENT_SAFE)}")
        elif value is not None:
            parts.append(f"{key}={quote(_query_value(value), safe=_URI_COMPONENT_SAFE)}")
    return "&".join(parts)


def _headers(token: str):
    """Generate authorization headers for Galaksion API"""
    return {"Authorization": f"Bearer {token}"}


def _tracking_headers(token: str) -> Dict[str, str]:
    """Browser identity plus per-request analytics headers (GET/PATCH)"""
    headers = dict(BROWSER_HEADERS)
    headers.update(_headers(token))
    headers["x-analytics-session"] = generate_analytics_session()
    headers["x-analytics-timestamp"] = str(int(time.time() * 1000))
    return headers


def _send_request(
    session,
    method: str,
    url: str,
    *,
    headers: Dict[str, str],
    body: Any = None,
) -> Any:
    """
    Send one request and decode the JSON body.

    HTTP error statuses are not raised: the API reports failures inside the body.
    Network errors and undecodable bodies raise TransportError.
    """
    try:
        resp = session.request(method, url, headers=headers, json=body, timeout=REQUEST_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error(f"[ERROR] {method} {url} - network error: {e}")
        raise TransportError(f"Network error: {e}") from e

    try:
        return resp.json()
    except ValueError as e:
        text = (resp.text or "")[:200]
        logger.error(f"[ERROR] {method} {url} - HTTP {resp.status_code}, body is not JSON: {text}")
        raise TransportError(f"HTTP {resp.status_code}: response is not JSON") from e


def response_error(body) -> Optional[ApiError]:
    """
    Classify a decoded body.

    Returns ExpiryError for the credential-expiry code, ApiError for
    `error` / `errors` / `success: false` shapes, None otherwise.
    """
    if not isinstance(body, dict):
        return None

    if str(body.get("code", "")) == EXPIRY_CODE:
        return ExpiryError("Token expired", body)

    error = body.get("error")
    if error:
        if isinstance(error, dict):
            return ApiError(error.get("message") or "API Error occurred", body)
        return ApiError(str(error), body)

    if body.get("errors"):
        return ApiError("API returned errors", body)

    if body.get("success") is False:
        return ApiError(body.get("message") or "API request failed", body)

    return None


class GalaksionClient:
    """
    Low-level Galaksion transport.

    The bearer token is read through `token_getter` before every call, so a
    token refreshed mid-run is picked up by the next request.
    """

    def __init__(self, token_getter: Callable[[], str], session=None):
        self.token_getter = token_getter
        self.session = session or requests.Session()

    def _token(self) -> str:
        token = self.token_getter()
        if not token:
            raise AuthError("No API token stored, generate one first")
        return token

    @staticmethod
    def _url(base_url: str, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        url = base_url + path.lstrip("/")
        if isinstance(params, dict):
            url += "?" + build_query_string(params)
        return url

    def get(self, path: str, params: Optional[Dict[str, Any]] = None):
        """GET from the reporting host for statistics, the management host otherwise"""
        base_url = REPORTING_BASE_URL if path == STATISTICS_PATH else MANAGEMENT_BASE_URL
        url = self._url(base_url, path, params)
        logger.debug(f"GET {url}")
        return _send_request(self.session, "GET", url, headers=_tracking_headers(self._token()))

    def post(self, path: str, body: Any = None):
        url = self._url(MANAGEMENT_BASE_URL, path)
        headers = _headers(self._token())
        headers["Content-Type"] = "application/json"
        logger.debug(f"POST {url}")
        return _send_request(self.session, "POST", url, headers=headers, body=body)

    def put(self, path: str, body: Any = None):
        url = self._url(MANAGEMENT_BASE_URL, path)
        headers = _headers(self._token())
        headers["Content-Type"] = "application/json"
        headers["Referer"] = CAMPAIGNS_REFERER
        logger.debug(f"PUT {url}")
        return _send_request(self.session, "PUT", url, headers=headers, body=body)

    def patch(self, path: str, body: Any = None):
        """PATCH always targets the reporting host"""
        url = self._url(REPORTING_BASE_URL, path)
        logger.debug(f"PATCH {url}")
        return _send_request(self.session, "PATCH", url, headers=_tracking_headers(self._token()), body=body)
