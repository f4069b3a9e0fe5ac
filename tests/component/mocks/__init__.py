"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (HTTP, remote resources).
"""

from .binding_mock import FakeItem, FakeResource
from .http_mock import MockHttpClient, MockHttpResponse

__all__ = [
    'FakeItem',
    'FakeResource',
    'MockHttpClient',
    'MockHttpResponse',
]
