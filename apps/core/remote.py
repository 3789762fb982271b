"""HTTP client for the remote registry service."""

import logging
from typing import Any, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class RemoteError(Exception):
    """Raised for any failed call to the remote service.

    Network failures and server-side rejections are not distinguished;
    both surface to the user the same way.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteService:
    """Thin wrapper around a requests session bound to the registry base URL."""

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    @classmethod
    def from_settings(cls) -> "RemoteService":
        """Build a client from the REGISTRY_API_* settings."""
        return cls(
            base_url=settings.REGISTRY_API_BASE_URL,
            timeout=settings.REGISTRY_API_TIMEOUT,
        )

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def post(self, path: str, payload: dict) -> Any:
        return self._request("POST", path, json=payload)

    def put(self, path: str, payload: dict) -> Any:
        return self._request("PUT", path, json=payload)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def upload(self, url: str, filename: str, content, content_type: str = "application/octet-stream") -> Any:
        """POST a multipart body with a single ``file`` field."""
        files = {"file": (filename, content, content_type)}
        return self._request("POST", url, files=files)

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = self.url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise RemoteError(f"{method} {url} failed with status {status}", status_code=status) from e
        except requests.RequestException as e:
            raise RemoteError(f"{method} {url} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning(f"Non-JSON response from {method} {url}")
            return None
