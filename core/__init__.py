#!/usr/bin/env python3
"""
Core Module for the Console Sync Layer

Shared infrastructure used by every resource client and synced collection.

COMPONENTS:
    - config/: Environment-driven configuration (API, sync, logging)
    - api_client.py: Base HTTP client with bearer auth and envelope unwrapping
    - errors.py: Error taxonomy, retry classification, user-facing messages
    - retry_executor.py: Retry with exponential backoff
    - notifications.py: Retry progress notifications

USAGE:
    from core.retry_executor import RetryExecutor
    from core.config import get_settings

    executor = RetryExecutor()
    result = await executor.execute(operation, max_attempts=3, base_delay_ms=1000)
"""

from .api_client import BaseApiClient
from .errors import (
    ApiError,
    BindingUnavailableError,
    ClientError,
    EnvelopeError,
    NetworkError,
    ServerError,
    ThrottledError,
    describe_error,
    is_retryable,
)
from .notifications import LoggingNotifier, Notifier
from .retry_executor import RetryExecutor, RetryPolicy

# Export public API
__all__ = [
    "BaseApiClient",
    "ApiError",
    "BindingUnavailableError",
    "ClientError",
    "EnvelopeError",
    "NetworkError",
    "ServerError",
    "ThrottledError",
    "describe_error",
    "is_retryable",
    "LoggingNotifier",
    "Notifier",
    "RetryExecutor",
    "RetryPolicy",
]

__version__ = "1.0.0"
