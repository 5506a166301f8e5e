"""
Configuration management for envbind itself.

These settings control where envbind reads the host environment from. They
are read from ENVBIND_* environment variables using Pydantic settings.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvBindSettings(BaseSettings):
    """Settings for loading the host environment."""

    env_file: Optional[str] = Field(
        None, description="Dotenv file layered over the process environment"
    )
    env_file_encoding: str = Field("utf-8", description="Encoding of the dotenv file")
    env_file_override: bool = Field(
        False, description="Let dotenv values win over process environment values"
    )

    model_config = SettingsConfigDict(
        env_prefix="ENVBIND_",
        case_sensitive=False,
        extra="ignore",
    )


# Global configuration instance
config: Optional[EnvBindSettings] = None


def get_config() -> EnvBindSettings:
    """
    Get the global configuration instance.

    Returns:
        EnvBindSettings: The envbind settings instance.
    """
    global config
    if config is None:
        config = EnvBindSettings()
    return config


def reload_config() -> EnvBindSettings:
    """
    Reload the configuration from environment variables.

    Returns:
        EnvBindSettings: The reloaded settings instance.
    """
    global config
    config = EnvBindSettings()
    return config
