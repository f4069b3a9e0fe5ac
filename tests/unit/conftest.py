"""
Unit Test Layer Configuration

Structure:
    tests/unit/
    ├── test_errors.py          Error taxonomy, classification, messages
    ├── test_retry_executor.py  Retry and backoff
    ├── test_models.py          Entity models, envelopes, identity normalization
    └── test_config.py          Environment-driven configuration

Usage:
    pytest tests/unit -v                 # All unit tests
    pytest tests/unit -m unit -v         # By marker
"""
import os
import sys

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
