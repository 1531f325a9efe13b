"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from modrate.config.settings import settings
    from modrate.config.refresh import load_refresh_options

    options = load_refresh_options(settings)
"""

from modrate.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
