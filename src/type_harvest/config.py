"""Configuration management for Type Harvest."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration via environment variables.

    Option values are kept as loose strings/bools here; they are only
    validated when normalized into RenderOptions, so a bad value in the
    environment falls back to the render default instead of failing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Default render options
    bold: str = Field(default="span", alias="TYPE_HARVEST_BOLD")
    italic: str = Field(default="true", alias="TYPE_HARVEST_ITALIC")
    wrap_paragraphs: str = Field(default="false", alias="TYPE_HARVEST_PARAGRAPHS")
    join_lines: str = Field(default="true", alias="TYPE_HARVEST_JOIN_LINES")
    links: str = Field(default="new-tab", alias="TYPE_HARVEST_LINKS")
    lists: str = Field(default="native", alias="TYPE_HARVEST_LISTS")

    # Logging
    log_level: str = Field(default="WARNING", alias="TYPE_HARVEST_LOG_LEVEL")

    def render_defaults(self) -> dict[str, str]:
        """Option values suitable for normalize_options."""
        return {
            "bold": self.bold,
            "italic": self.italic,
            "wrap_paragraphs": self.wrap_paragraphs,
            "join_lines": self.join_lines,
            "links": self.links,
            "lists": self.lists,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
