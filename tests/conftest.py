"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/  : Component tests (mocked HTTP and remote resources)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    CollectingNotifier,
    RecordingSleep,
    make_item_id,
    make_timestamp,
)


# =============================================================================
# Test Configuration
# =============================================================================

class TestConfig:
    """Centralized test configuration"""

    API_BASE_URL = "http://test/api"
    API_TOKEN = "test-token"

    # Retry settings used by component tests (no real sleeping)
    RETRY_MAX_ATTEMPTS = 3
    RETRY_BASE_DELAY_MS = 1000


@pytest.fixture(scope="session")
def config() -> TestConfig:
    """Test configuration fixture"""
    return TestConfig()


# =============================================================================
# Retry Doubles
# =============================================================================

@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Async sleep that records delays instead of waiting"""
    return RecordingSleep()


@pytest.fixture
def notifier() -> CollectingNotifier:
    """Notifier that collects every notification"""
    return CollectingNotifier()


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def item_id() -> str:
    """Unique item ID"""
    return make_item_id()


@pytest.fixture
def now_iso() -> str:
    """Current UTC timestamp"""
    return make_timestamp()
