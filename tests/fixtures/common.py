"""
Common/Shared Fixtures

Base ID generators and timestamps used across test layers.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional


def make_item_id(prefix: str = "itm") -> str:
    """Generate a unique item ID"""
    return f"{prefix}_test_{uuid.uuid4().hex[:12]}"


def make_storage_id() -> str:
    """Generate a 24-hex raw storage identifier"""
    return uuid.uuid4().hex[:24]


def make_email(prefix: Optional[str] = None) -> str:
    """Generate a unique email"""
    prefix = prefix or f"test_{uuid.uuid4().hex[:8]}"
    return f"{prefix}@example.com"


def make_timestamp(offset_minutes: int = 0) -> str:
    """Generate a UTC ISO timestamp, optionally shifted"""
    return (datetime.now(timezone.utc) + timedelta(minutes=offset_minutes)).isoformat()
