from functools import lru_cache
from typing import Optional
import os
import re

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


API_VERSION_PATTERN = re.compile(r"^(\d{4}-\d{2}|unstable)$")


class Settings(BaseSettings):
    """Adaptor configuration settings loaded from environment variables."""

    PROJECT_NAME: str = "Inventory Adaptor"

    # Shopify store settings
    SHOPIFY_SHOP_NAME: Optional[str] = None
    SHOPIFY_ACCESS_TOKEN: Optional[str] = None
    SHOPIFY_API_VERSION: str = "2024-01"

    # External API timeout settings
    DEFAULT_TIMEOUT: int = 10  # seconds
    USER_AGENT: str = "inventory-adaptor/0.1.0"

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SHOPIFY_API_VERSION")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Validate that the API version is a dated release or 'unstable'."""
        if not API_VERSION_PATTERN.match(v):
            raise ValueError("SHOPIFY_API_VERSION must look like 'YYYY-MM' or be 'unstable'")
        return v

    @field_validator("DEFAULT_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("DEFAULT_TIMEOUT must be positive")
        return v


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from the given .env file if it exists.

    Args:
        env_file: Path to the .env file, relative to the working directory.
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(dotenv_path=env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Create and cache adaptor settings.

    Returns:
        Settings: Adaptor settings instance
    """
    load_env_file()
    return Settings()
