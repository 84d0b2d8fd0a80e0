"""
Shared HTTP client for the storefront REST backend.

Every call goes through one requests.Session carrying a JSON content type and
a fixed timeout. Transport failures, timeouts and non-2xx answers surface as
ApiError; callers decide which user-facing message to show.
"""
import logging
from typing import Any, Dict, Optional

import requests

DEFAULT_BASE_URL = "http://localhost:5056"
DEFAULT_TIMEOUT = 1.0


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        self.logger = logging.getLogger(__name__)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Send one request and decode the JSON body.

        Returns None for an empty body and the raw text when the body is not JSON.
        Raises ApiError on timeout, connection failure or an HTTP error status.
        """
        clean_params = {k: v for k, v in (params or {}).items() if v is not None} or None
        url = self._url(path)
        try:
            response = self._session.request(
                method,
                url,
                params=clean_params,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            self.logger.warning("%s %s timed out after %ss", method, url, self.timeout)
            raise ApiError(f"{method} {path} timed out") from exc
        except requests.exceptions.RequestException as exc:
            self.logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        if response.status_code >= 400:
            body = _decode(response)
            self.logger.warning("%s %s returned %s", method, url, response.status_code)
            raise ApiError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                payload=body,
            )
        return _decode(response)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        self._session.close()


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
