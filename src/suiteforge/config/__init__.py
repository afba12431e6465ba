"""Configuration module for SuiteForge.

Usage:
    from suiteforge.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.base_url)
"""

from suiteforge.config.logging import configure_logging, get_logger
from suiteforge.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_logger", "get_settings"]
