"""
Shared Test Fixtures

Centralized factories and test doubles used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - factories.py: API record and envelope factories
    - retry_fixtures.py: Recording sleep, collecting notifier, flaky operations
"""

# Common utilities
from .common import (
    make_item_id,
    make_storage_id,
    make_email,
    make_timestamp,
)

# Record factories
from .factories import (
    make_record,
    make_user_record,
    make_post_record,
    make_task_record,
    make_campaign_record,
    make_envelope,
    make_list_envelope,
)

# Retry doubles
from .retry_fixtures import (
    RecordingSleep,
    CollectingNotifier,
    FlakyOperation,
)

__all__ = [
    # Common
    "make_item_id",
    "make_storage_id",
    "make_email",
    "make_timestamp",
    # Factories
    "make_record",
    "make_user_record",
    "make_post_record",
    "make_task_record",
    "make_campaign_record",
    "make_envelope",
    "make_list_envelope",
    # Retry doubles
    "RecordingSleep",
    "CollectingNotifier",
    "FlakyOperation",
]
