#!/usr/bin/env python3
"""Remote API configuration

Endpoint, timeout and bearer credential for the marketing platform API
that every resource client talks to.
"""
import os
from dataclasses import dataclass
from typing import Optional

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ApiConfig:
    """Marketing platform API endpoint"""

    base_url: str = "http://localhost:5001/api"
    timeout: float = 10.0

    # Bearer credential attached to every request (login flow lives elsewhere)
    token: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'ApiConfig':
        """Load API configuration from environment variables"""
        return cls(
            base_url=os.getenv("API_BASE_URL") or os.getenv("API_URL", "http://localhost:5001/api"),
            timeout=_float(os.getenv("API_TIMEOUT", "10"), 10.0),
            token=os.getenv("API_TOKEN") or None,
        )
