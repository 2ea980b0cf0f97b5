"""Configuration package.

Settings are loaded with pydantic-settings from environment variables
(prefix ``SCENENAV_``) and an optional ``.env`` file.

Usage:
    from scenenav.config import get_settings

    settings = get_settings()
    if settings.drop_stale_hook_results:
        ...
"""

from .settings import NavigationSettings, get_settings, reset_settings

__all__ = [
    "NavigationSettings",
    "get_settings",
    "reset_settings",
]
