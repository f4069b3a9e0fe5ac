#!/usr/bin/env python3
"""Console main configuration

Combines the API, sync and logging sub-configs.
"""
import os
from dataclasses import dataclass, field

from .api_config import ApiConfig
from .logging_config import LoggingConfig
from .sync_config import SyncConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass
class ConsoleConfig:
    """Main console configuration with all sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False

    # Sub-configurations
    api: ApiConfig = field(default_factory=ApiConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'ConsoleConfig':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),
            api=ApiConfig.from_env(),
            sync=SyncConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )
