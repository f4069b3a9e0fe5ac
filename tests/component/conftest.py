"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── mocks/                      Mock implementations
    ├── test_synced_collection.py   Collection engine against FakeResource
    ├── test_sync_store.py          Shared store
    ├── test_resource_clients.py    Resource clients against MockHttpClient
    └── test_controllers.py         use_* controllers end to end

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import ApiConfig, SyncConfig
from core.retry_executor import RetryExecutor
from tests.component.mocks import FakeResource, MockHttpClient
from tests.fixtures import CollectingNotifier, RecordingSleep


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Config
# =============================================================================

@pytest.fixture
def api_config() -> ApiConfig:
    """API config pointing at the mock host"""
    return ApiConfig(base_url="http://test/api", timeout=5.0, token="test-token")


@pytest.fixture
def sync_config() -> SyncConfig:
    """Default sync config (3 attempts, 1000ms base)"""
    return SyncConfig()


# =============================================================================
# Retry
# =============================================================================

@pytest.fixture
def executor(recording_sleep: RecordingSleep, notifier: CollectingNotifier) -> RetryExecutor:
    """Retry executor that never really sleeps"""
    return RetryExecutor(notifier=notifier, sleep=recording_sleep)


# =============================================================================
# Remote Mocks
# =============================================================================

@pytest.fixture
def fake_resource() -> FakeResource:
    """Empty in-memory remote resource"""
    return FakeResource()


@pytest.fixture
def mock_http_client() -> MockHttpClient:
    """Mock HTTP client for resource clients"""
    return MockHttpClient()
