"""Configuration management for the OCI tag audit.

This module handles loading and validating configuration from environment
variables with sensible defaults.
"""

from typing import Optional
from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    All settings have sensible defaults for local runs. They can be set
    via environment variables or a .env file.
    """
    
    # OCI Configuration
    config_path_file: str = Field(
        default="config_path.txt",
        description="File whose first line is the path of the OCI config file",
        validation_alias="OCI_CONFIG_PATH_FILE"
    )
    oci_config_file: Optional[str] = Field(
        default=None,
        description="Path of the OCI config file (overrides config_path_file)",
        validation_alias=AliasChoices("OCI_CONFIG_FILE", "OCI_CLI_CONFIG_FILE")
    )
    resolve_home_region: bool = Field(
        default=True,
        description="Look up the tenancy home region with the DEFAULT profile before scanning",
        validation_alias="RESOLVE_HOME_REGION"
    )
    
    # Search Configuration
    search_query: str = Field(
        default="query all resources",
        description="Structured Resource Search query",
        validation_alias="SEARCH_QUERY"
    )
    page_limit: int = Field(
        default=1000,
        ge=1,
        le=1000,
        description="Items requested per search page",
        validation_alias="SEARCH_PAGE_LIMIT"
    )
    page_delay_seconds: float = Field(
        default=0.2,
        ge=0.0,
        description="Delay between consecutive search page requests in seconds",
        validation_alias="SEARCH_PAGE_DELAY_SECONDS"
    )
    
    # Report Configuration
    output_dir: str = Field(
        default="data",
        description="Directory receiving the CSV reports",
        validation_alias="REPORT_OUTPUT_DIR"
    )
    
    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="LOG_LEVEL"
    )
    
    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for environment variables
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """
    Get application settings.
    
    Loads settings from environment variables and .env file.
    
    Returns:
        Settings instance with all configuration values
    """
    return Settings()


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def settings() -> Settings:
    """
    Get the global settings instance.
    
    Creates the settings instance on first call and caches it.
    
    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings
