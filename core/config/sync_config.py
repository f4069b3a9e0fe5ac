#!/usr/bin/env python3
"""Synchronization layer configuration

Retry policy defaults and mutation handling for synced collections.
"""
import os
from dataclasses import dataclass

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class SyncConfig:
    """Retry and reconciliation settings"""

    # 2 retries after the first attempt, 1s base delay doubling per retry
    retry_max_attempts: int = 3
    retry_base_delay_ms: int = 1000
    retry_notify_progress: bool = False

    # One in-flight mutation per collection
    serialize_mutations: bool = True

    @classmethod
    def from_env(cls) -> 'SyncConfig':
        """Load sync configuration from environment variables"""
        return cls(
            retry_max_attempts=max(1, _int(os.getenv("RETRY_MAX_ATTEMPTS", "3"), 3)),
            retry_base_delay_ms=max(0, _int(os.getenv("RETRY_BASE_DELAY_MS", "1000"), 1000)),
            retry_notify_progress=_bool(os.getenv("RETRY_NOTIFY_PROGRESS", "false")),
            serialize_mutations=_bool(os.getenv("SYNC_SERIALIZE_MUTATIONS", "true")),
        )
