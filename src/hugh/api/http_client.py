import logging
from typing import Any, Optional

import requests

from hugh.exceptions import DecodeError, TransportError

_LOGGER = logging.getLogger(__name__)


def bridge_url(address: str, *parts: str) -> str:
    """Build a v1 API url, e.g. ``bridge_url("10.0.0.2", token, "lights")``."""
    path = "/".join(str(p).strip("/") for p in parts if p != "")
    base = f"http://{address}/api"
    return f"{base}/{path}" if path else base


class HttpClient:
    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.timeout = timeout

    def get(self, url: str) -> Any:
        return self._request("GET", url)

    def put(self, url: str, payload: dict) -> Any:
        return self._request("PUT", url, payload)

    def post(self, url: str, payload: dict) -> Any:
        return self._request("POST", url, payload)

    def _request(self, method: str, url: str, payload: Optional[dict] = None) -> Any:
        _LOGGER.debug("%s %s %s", method, url, payload if payload is not None else "")
        try:
            r = self.session.request(method, url, json=payload, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"{method} {url} returned invalid JSON: {e}") from e
