"""
API Error Taxonomy

Errors raised by resource clients and the sync layer, plus the retry
classification and the user-facing messages shown for each failure.
"""

from typing import Any, Optional

import httpx


RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})


# ============================================================================
# Exceptions
# ============================================================================


class ApiError(Exception):
    """Base error for remote API failures"""
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class NetworkError(ApiError):
    """No response was received (connectivity failure or transport timeout)"""
    pass


class HttpStatusError(ApiError):
    """The API answered with an error status"""
    def __init__(self, message: str, status_code: int, payload: Any = None):
        super().__init__(message, status_code=status_code, payload=payload)


class ServerError(HttpStatusError):
    """Status >= 500"""
    pass


class ThrottledError(HttpStatusError):
    """Status 408 (request timeout) or 429 (too many requests)"""
    pass


class ClientError(HttpStatusError):
    """Status in [400, 500) other than 408/429: bad input, auth, not found, conflict"""
    pass


class EnvelopeError(ApiError):
    """A 2xx response whose envelope reports failure or cannot be read"""
    pass


class BindingUnavailableError(Exception):
    """The requested operation is not configured on the resource binding"""
    def __init__(self, operation: str, resource: Optional[str] = None):
        target = f" for {resource}" if resource else ""
        super().__init__(f"{operation} is not provided{target}")
        self.operation = operation
        self.resource = resource


def error_for_status(status_code: int, message: str, payload: Any = None) -> HttpStatusError:
    """Build the taxonomy error matching an HTTP status code"""
    if status_code >= 500:
        return ServerError(message, status_code, payload)
    if status_code in RETRYABLE_CLIENT_STATUSES:
        return ThrottledError(message, status_code, payload)
    return ClientError(message, status_code, payload)


# ============================================================================
# Classification
# ============================================================================


def status_of(error: BaseException) -> Optional[int]:
    """HTTP status carried by an error, None when no response was received"""
    if isinstance(error, ApiError):
        return error.status_code
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def is_retryable(error: BaseException) -> bool:
    """
    Decide whether an operation that raised ``error`` may be attempted again

    Network failures, 5xx, 408 and 429 are retryable. Any other 4xx is fatal,
    as is a failed envelope (the server answered and said no).
    """
    if isinstance(error, EnvelopeError):
        return False
    status = status_of(error)
    if status is None:
        return True
    if status >= 500:
        return True
    if status in RETRYABLE_CLIENT_STATUSES:
        return True
    return not 400 <= status < 500


# ============================================================================
# User-facing messages
# ============================================================================


def _server_message(error: BaseException) -> Optional[str]:
    payload = getattr(error, "payload", None)
    if isinstance(error, httpx.HTTPStatusError):
        try:
            payload = error.response.json()
        except ValueError:
            payload = None
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error")
        if isinstance(message, str) and message:
            return message
    return None


def describe_error(error: BaseException, operation: str = "processing", entity: str = "item") -> str:
    """
    Turn an error into the message shown next to a collection

    Args:
        error: Exception raised by a binding or the retry executor
        operation: Verb in progressive form ("fetching", "creating", ...)
        entity: Entity label ("task", "posts", ...)

    Returns:
        Human-readable message
    """
    status = status_of(error)
    server_message = _server_message(error)

    if status is not None and status >= 400:
        if status == 400:
            return server_message or f"Invalid request data for {entity}."
        if status == 401:
            return "Authentication required. Please log in again."
        if status == 403:
            return f"Access denied while {operation} {entity}. You don't have permission for this action."
        if status == 404:
            return f"{entity.capitalize()} not found."
        if status == 409:
            return server_message or f"{entity.capitalize()} already exists."
        if status == 422:
            return server_message or f"Unable to process {entity} data."
        if status == 429:
            return "Too many requests. Please try again later."
        if status == 500:
            return f"Server error occurred while {operation} {entity}. Please try again later."
        if status in (502, 503, 504):
            return "Service temporarily unavailable. Please try again later."
        return server_message or f"An error occurred while {operation} {entity}."

    if isinstance(error, (NetworkError, httpx.TransportError)):
        return f"Network error occurred while {operation} {entity}. Please check your internet connection."

    return str(error) or f"An unexpected error occurred while {operation} {entity}."


__all__ = [
    "ApiError",
    "NetworkError",
    "HttpStatusError",
    "ServerError",
    "ThrottledError",
    "ClientError",
    "EnvelopeError",
    "BindingUnavailableError",
    "error_for_status",
    "status_of",
    "is_retryable",
    "describe_error",
]
