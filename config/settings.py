"""
Centralized configuration for the Zobot sales chatbot.

All settings are loaded from environment variables via .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Brand
    brand_name: str = Field(default="Zoho Hackathon Demo")

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=3000)
    api_title: str = Field(default="Zobot Sales Chatbot API")
    api_version: str = Field(default="1.0.0")
    cors_origins: str = Field(default="*")

    # CRM (lead creation notification)
    crm_provider: str = Field(default="zoho")
    crm_api_key: Optional[str] = Field(default=None)
    crm_webhook_url: Optional[str] = Field(default=None)
    crm_timeout_seconds: float = Field(default=10.0)

    # Logging
    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)

    # Append-only JSON logs
    log_directory: str = Field(default="./logs")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
