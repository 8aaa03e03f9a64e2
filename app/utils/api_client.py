import logging
import threading
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ApiClient:
    """
    Thin wrapper around a requests.Session bound to the backend base URL.

    Every call is logged as "[API] METHOD path". Failures are logged with the
    response body when the backend answered, "No response received" when the
    connection failed, or the raw error message otherwise, and then re-raised
    for the caller to handle.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self._shared_session = session
        self._local = threading.local()
        if session is not None:
            session.headers.update(JSON_HEADERS)

    @property
    def session(self) -> requests.Session:
        """
        One Session per calling thread. An injected session is shared as is.
        """
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(JSON_HEADERS)
            self._local.session = session
        return session

    def get(self, path: str, params: Optional[Dict[str, Any]] = None):
        return self._request("GET", path, params=params)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None):
        return self._request("POST", path, json=json)

    def put(self, path: str, json: Optional[Dict[str, Any]] = None):
        return self._request("PUT", path, json=json)

    def delete(self, path: str):
        return self._request("DELETE", path)

    def _request(self, method: str, path: str, **kwargs):
        logger.info("[API] %s %s", method, path)
        try:
            response = self.session.request(method, f"{self.base_url}{path}", **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            if e.response is not None:
                logger.error("[API Error] %s", _response_body(e.response))
            elif e.request is not None:
                logger.error("[API Error] No response received")
            else:
                logger.error("[API Error] %s", e)
            raise

        if not response.content:
            return None
        return response.json()


def _response_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


def describe_error(exc: Exception, fallback: str) -> str:
    """Server-supplied message for a failed call, else the fallback."""
    response = getattr(exc, "response", None)
    if response is None:
        return fallback

    body = _response_body(response)
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if body.get(key):
                return str(body[key])
        return fallback
    if isinstance(body, str) and body.strip():
        return body.strip()
    return fallback
