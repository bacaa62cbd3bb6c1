"""
Application settings using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Fetcher configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Azure Storage (static key path reads STORAGE_ACCOUNT / STORAGE_ACCESS_KEY)
    storage_account: str | None = None
    storage_access_key: SecretStr | None = None
    storage_account_url: str | None = Field(
        None, description="Explicit account URL, e.g. for a local emulator"
    )
    storage_endpoint_suffix: str = "core.windows.net"
    storage_token_scope: str = "https://storage.azure.com/.default"

    # Download
    fetch_chunk_size: int = Field(0x2000, gt=0, description="Bytes per ranged request")
    fetch_download_mode: Literal["first_chunk", "full"] = "first_chunk"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @property
    def storage_access_key_str(self) -> str | None:
        """Get Azure Storage access key as string."""
        if self.storage_access_key:
            return self.storage_access_key.get_secret_value()
        return None

    def account_url_for(self, account_name: str) -> str:
        """Build the blob endpoint URL for an account."""
        if self.storage_account_url:
            return self.storage_account_url.rstrip("/")
        return f"https://{account_name}.blob.{self.storage_endpoint_suffix}"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
