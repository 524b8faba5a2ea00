"""
Application settings and configuration management.

This module handles the S&S Activewear account credentials, region selection
and runtime options using Pydantic settings management for type safety and
validation. Settings are read once per process and handed to the API client
explicitly; nothing below the composition root reads the environment.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


US_BASE_URL = "https://api.ssactivewear.com/V2/"
CA_BASE_URL = "https://api-ca.ssactivewear.com/V2/"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Credentials are stored as SecretStr to prevent accidental logging.
    Missing credentials do not fail validation: they surface as a
    MissingCredentialsError on the first API call instead.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Account credentials
    account_number: Optional[SecretStr] = Field(default=None, alias="SS_ACCOUNT_NUMBER")
    api_key: Optional[SecretStr] = Field(default=None, alias="SS_API_KEY")
    region: Literal["US", "CA"] = Field(default="US", alias="SS_REGION")

    # Application Configuration
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL"
    )
    log_json: bool = Field(default=False, alias="LOG_JSON")

    # HTTP
    request_timeout_seconds: float = Field(default=30.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")
    user_agent: str = Field(default="SS-Activewear-MCP/1.0", alias="SS_USER_AGENT")

    # Search / export
    default_search_limit: int = Field(default=20, ge=0, alias="DEFAULT_SEARCH_LIMIT")
    preferred_warehouses: str = Field(default="", alias="SS_PREFERRED_WAREHOUSES")

    @field_validator("region", mode="before")
    @classmethod
    def normalize_region(cls, v: Optional[str]) -> str:
        """Accept lowercase region codes and treat blank as the US default."""
        if not v:
            return "US"
        return str(v).strip().upper()

    @field_validator("account_number", "api_key", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        """An empty variable counts as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def base_url(self) -> str:
        """API root for the configured region."""
        return CA_BASE_URL if self.region == "CA" else US_BASE_URL

    @property
    def preferred_warehouse_codes(self) -> tuple[str, ...]:
        """Warehouse codes preferred when collapsing inventory for export."""
        return tuple(
            code.strip().upper()
            for code in self.preferred_warehouses.split(",")
            if code.strip()
        )

    def missing_credentials(self) -> list[str]:
        """Names of required credential variables that are not set."""
        missing = []
        if self.account_number is None:
            missing.append("SS_ACCOUNT_NUMBER")
        if self.api_key is None:
            missing.append("SS_API_KEY")
        return missing

    @property
    def has_credentials(self) -> bool:
        return not self.missing_credentials()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
