"""Configuration management for scenenav using pydantic-settings.

Supports environment variables, .env files, and type validation.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class NavigationSettings(BaseSettings):
    """Main configuration settings for the navigation store."""

    # Logging settings
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field("INFO", description="Log level for the navigation loggers")
    structured_logging: bool = Field(True, description="Render logs as JSON")
    log_path: Path | None = Field(None, description="Directory for log files")

    # Fixed-name navigate actions
    drawer_open_route: str = Field("DrawerOpen", description="Route name opening the drawer")
    drawer_close_route: str = Field("DrawerClose", description="Route name closing the drawer")

    # Lifecycle settings
    drop_stale_hook_results: bool = Field(
        False,
        description="Skip success/failure continuations of enter hooks whose commit was superseded",
    )

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_prefix = "SCENENAV_"
        case_sensitive = False
        extra = "ignore"

    def model_post_init(self, __context) -> None:
        """Post-initialization validation."""
        self.log_level = self.log_level.upper()
        if not self.drawer_open_route or not self.drawer_close_route:
            raise ValueError("Drawer route names must not be empty")


# Singleton instance
_settings: NavigationSettings | None = None


def get_settings() -> NavigationSettings:
    """Get the cached settings instance.

    Returns:
        NavigationSettings instance
    """
    global _settings

    if _settings is None:
        _settings = NavigationSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
