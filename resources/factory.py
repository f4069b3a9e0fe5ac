"""
Resource Client Factory

Creates resource clients that share one HTTP connection pool. This is the
ONLY place that builds the real httpx client for resources.

Usage:
    from resources.factory import get_client_factory
    tasks_client = get_client_factory().get("tasks")
"""
import logging
from typing import Any, Dict, Optional

import httpx

from core.api_client import TokenProvider
from core.config import ApiConfig, get_settings

from .clients import RESOURCE_CLIENTS, ResourceClient

logger = logging.getLogger(__name__)


class ResourceClientFactory:
    """Resource client factory"""

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        token_provider: Optional[TokenProvider] = None,
        http_client: Optional[Any] = None,
    ):
        """
        Args:
            config: ApiConfig (defaults to global settings)
            token_provider: Bearer token source shared by every client
            http_client: Shared HTTP client (an httpx.AsyncClient is built when omitted)
        """
        self.config = config or get_settings().api
        self.token_provider = token_provider
        self._owns_http_client = http_client is None
        self._http_client = http_client
        self._clients: Dict[str, ResourceClient] = {}

    def _shared_http_client(self) -> Any:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._http_client

    def get(self, resource: str) -> ResourceClient:
        """
        Get (or create) the client for ``resource``

        Raises:
            ValueError: Unknown resource name
        """
        if resource not in self._clients:
            client_class = RESOURCE_CLIENTS.get(resource)
            if client_class is None:
                raise ValueError(
                    f"Unknown resource: {resource}. Available: {', '.join(sorted(RESOURCE_CLIENTS))}"
                )
            self._clients[resource] = client_class(
                config=self.config,
                token_provider=self.token_provider,
                http_client=self._shared_http_client(),
            )
            logger.debug(f"Created {client_class.__name__}")
        return self._clients[resource]

    async def close(self) -> None:
        """Close the shared HTTP client"""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        self._clients.clear()


_factory: Optional[ResourceClientFactory] = None


def get_client_factory() -> ResourceClientFactory:
    """Get the process-wide client factory"""
    global _factory
    if _factory is None:
        _factory = ResourceClientFactory()
    return _factory


def set_client_factory(factory: Optional[ResourceClientFactory]) -> None:
    """Replace the process-wide client factory (None resets it)"""
    global _factory
    _factory = factory


__all__ = [
    "ResourceClientFactory",
    "get_client_factory",
    "set_client_factory",
]
