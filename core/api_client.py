"""
Base API Client for the Marketing Platform

Base class for every resource client. Attaches the bearer credential,
unwraps the ``{success, data, message}`` envelope and maps failures onto
the error taxonomy in ``core.errors``.
"""

import httpx
import logging
from typing import Any, Callable, Dict, Optional
from abc import ABC

from .config import ApiConfig, get_settings
from .errors import EnvelopeError, NetworkError, error_for_status

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class BaseApiClient(ABC):
    """
    API client base class

    Handles:
    1. Base URL and timeout from ApiConfig
    2. Bearer authentication on every request
    3. HTTP client lifecycle
    4. Envelope unwrapping and error mapping

    Example:
        class TaskClient(BaseApiClient):
            async def get_task(self, task_id: str):
                envelope = await self.get(f"/tasks/{task_id}")
                return envelope["data"]
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        timeout: Optional[float] = None,
        http_client: Optional[Any] = None,
        config: Optional[ApiConfig] = None,
    ):
        """
        Initialize API client

        Args:
            base_url: API base URL (defaults to ApiConfig.base_url)
            token_provider: Returns the current bearer token, or None when signed out
            timeout: Request timeout in seconds (defaults to ApiConfig.timeout)
            http_client: Pre-built httpx.AsyncClient (or compatible test double)
            config: ApiConfig instance (defaults to global settings)
        """
        config = config or get_settings().api

        self.base_url = (base_url or config.base_url).rstrip('/')
        self.token_provider = token_provider or (lambda: config.token)

        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.timeout,
            headers={"Content-Type": "application/json"},
        )

        logger.debug(f"Initialized {self.__class__.__name__}: {self.base_url}")

    def _auth_headers(self) -> Dict[str, str]:
        """Authorization header for the current token, if any"""
        token = self.token_provider()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def close(self):
        """Close HTTP client"""
        if self._owns_client:
            await self.client.aclose()
        logger.debug(f"Closed {self.__class__.__name__}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # HTTP method wrappers (return the envelope)
    # ========================================

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET request"""
        return await self._send("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST request"""
        return await self._send("POST", path, json=json)

    async def put(self, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """PUT request"""
        return await self._send("PUT", path, json=json)

    async def delete(self, path: str) -> Dict[str, Any]:
        """DELETE request"""
        return await self._send("DELETE", path)

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = self._auth_headers()
        logger.debug(f"{method} {url}")

        try:
            if method == "GET":
                response = await self.client.get(url, params=params, headers=headers)
            elif method == "POST":
                response = await self.client.post(url, json=json, headers=headers)
            elif method == "PUT":
                response = await self.client.put(url, json=json, headers=headers)
            elif method == "DELETE":
                response = await self.client.delete(url, headers=headers)
            else:
                raise ValueError(f"Unsupported method: {method}")
        except httpx.TransportError as e:
            logger.warning(f"{method} {url} got no response: {e}")
            raise NetworkError(f"Network error. Please check your connection. ({e})") from e

        return self._read_envelope(method, url, response)

    def _read_envelope(self, method: str, url: str, response: Any) -> Dict[str, Any]:
        status_code = response.status_code

        try:
            body = response.json()
        except ValueError:
            body = None

        if status_code >= 400:
            message = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("error")
            message = message or f"HTTP {status_code}"
            logger.warning(f"{method} {url} failed: {status_code} {message}")
            raise error_for_status(status_code, message, body)

        if not isinstance(body, dict):
            raise EnvelopeError(f"Malformed response from {method} {url}", status_code, body)

        if body.get("success") is False:
            message = body.get("message") or f"{method} {url} was not successful"
            raise EnvelopeError(message, status_code, body)

        return body

    async def health_check(self) -> bool:
        """
        Health check

        Returns:
            Whether the API answered the health endpoint
        """
        try:
            await self.get("/health")
            return True
        except Exception as e:
            logger.warning(f"{self.__class__.__name__} health check failed: {e}")
            return False


__all__ = ["BaseApiClient", "TokenProvider"]
