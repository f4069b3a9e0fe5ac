#!/usr/bin/env python3
"""Modular configuration system for the console sync layer

Configuration hierarchy:
- api_config: Remote marketing API endpoint, timeout and bearer token
- sync_config: Retry policy defaults and mutation serialization
- logging_config: Logging configuration
"""
import os
from pathlib import Path
from dotenv import load_dotenv
from .api_config import ApiConfig
from .console_config import ConsoleConfig
from .logging_config import LoggingConfig, configure_logging
from .sync_config import SyncConfig

# Environment files live under deployment/environments at the project root
ENVIRONMENTS_DIR = Path(__file__).resolve().parents[2] / "deployment" / "environments"

env_files = {
    "development": ENVIRONMENTS_DIR / "dev.env",
    "dev": ENVIRONMENTS_DIR / "dev.env",
    "testing": ENVIRONMENTS_DIR / "test.env",
    "test": ENVIRONMENTS_DIR / "test.env",
    "staging": ENVIRONMENTS_DIR / "staging.env",
    "production": ENVIRONMENTS_DIR / "production.env",
}


def env_file_for(env: str) -> Path:
    """Environment file for ``env``; unknown names use the development file"""
    return env_files.get(env, env_files["development"])


# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_file = env_file_for(env)
load_dotenv(env_file, override=False)

# Create global settings instance
settings = ConsoleConfig.from_env()

def get_settings() -> ConsoleConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> ConsoleConfig:
    """Reload settings from environment"""
    global settings
    settings = ConsoleConfig.from_env()
    return settings

__all__ = [
    # Main config
    'ConsoleConfig',
    'get_settings',
    'reload_settings',
    'settings',
    # Sub-configs
    'ApiConfig',
    'SyncConfig',
    'LoggingConfig',
    'configure_logging',
    # Environment files
    'env_file_for',
    'env_files',
]
