"""
Shared configuration management for the HTTP compression layer.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SECTION_PATH = "blowery.web/httpCompress"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="HTTPCOMPRESS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    
    # Compression settings document
    config_file: Optional[str] = Field(default=None, description="XML or YAML document holding the section")
    config_format: Optional[str] = Field(default=None, description="xml|yaml; inferred from the file suffix when unset")
    section_path: str = Field(default=DEFAULT_SECTION_PATH)


def get_config(**overrides) -> BaseConfig:
    """Get configuration, re-reading the environment on every call."""
    return BaseConfig(**overrides)
