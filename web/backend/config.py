#!/usr/bin/env python3
"""
Configuration access for the Mentor Match web application.
"""

import os
from pathlib import Path
from functools import lru_cache

from core.config_loader import AppConfig, load_config

# Set by `main.py --config PATH serve` so the server and its workers load the same file
CONFIG_PATH_ENV = "MENTOR_MATCH_CONFIG"


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> str:
    return os.environ.get(CONFIG_PATH_ENV) or str(get_project_root() / 'config.yaml')


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads the file named by MENTOR_MATCH_CONFIG, else config.yaml from the
    project root, and applies environment variable overrides
    (see core.config_loader).

    Returns:
        AppConfig: The application configuration.
    """
    return load_config(get_config_path())
