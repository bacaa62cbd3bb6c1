"""
Fetch request model.
"""

from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from src.config import Settings, get_settings
from src.models.context import ExecutionContext

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 0x2000


class CredentialMode(str, Enum):
    """How the blob client authenticates."""

    STATIC_KEY = "static_key"
    DEFAULT_CHAIN = "default_chain"


class DownloadMode(str, Enum):
    """How chunks are accumulated into the result."""

    # Publish the accumulator as soon as the first chunk arrives
    FIRST_CHUNK = "first_chunk"
    # Read the whole stream, then publish
    FULL = "full"


class FetchRequest(BaseModel):
    """
    A single blob fetch.

    Immutable once constructed; every field is supplied by the caller.
    """

    model_config = ConfigDict(frozen=True)

    container_name: str = Field(..., min_length=1)
    blob_name: str = Field(..., min_length=1)
    credential_mode: CredentialMode = CredentialMode.STATIC_KEY
    account_name: str = Field(..., min_length=1)
    access_key: SecretStr | None = None
    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, gt=0)
    download_mode: DownloadMode = DownloadMode.FIRST_CHUNK

    @property
    def access_key_str(self) -> str | None:
        """Get the access key as string."""
        if self.access_key:
            return self.access_key.get_secret_value()
        return None

    @classmethod
    def from_context(
        cls,
        context: ExecutionContext,
        settings: Settings | None = None,
    ) -> "FetchRequest | None":
        """
        Build a request from host context attributes.

        Environment-backed settings supply the static key and the fallback
        account name. Returns None when the context lacks a container, blob
        or account name, or when the values do not validate.

        Raises:
            SystemExit: static key mode without STORAGE_ACCOUNT or STORAGE_ACCESS_KEY
        """
        settings = settings or get_settings()

        container_name = context.find_text("container_name")
        blob_name = context.find_text("blob_name")
        if not container_name or not blob_name:
            logger.warning(
                "Missing container or blob name",
                container_name=container_name,
                blob_name=blob_name,
            )
            return None

        if context.is_enabled("use_default_credentials"):
            mode = CredentialMode.DEFAULT_CHAIN
            access_key = None
        else:
            mode = CredentialMode.STATIC_KEY
            require_static_key_env(settings)
            access_key = settings.storage_access_key

        account_name = context.find_text("account_name") or settings.storage_account
        if not account_name:
            logger.error("Missing account name", credential_mode=mode.value)
            return None

        try:
            return cls(
                container_name=container_name,
                blob_name=blob_name,
                credential_mode=mode,
                account_name=account_name,
                access_key=access_key,
                chunk_size=settings.fetch_chunk_size,
                download_mode=DownloadMode(settings.fetch_download_mode),
            )
        except ValidationError as e:
            logger.error("Invalid fetch request", error=str(e))
            return None


def require_static_key_env(settings: Settings) -> None:
    """
    Stop the process unless STORAGE_ACCOUNT and STORAGE_ACCESS_KEY are set.

    A context account name selects which account to use but does not stand
    in for the environment values.
    """
    missing = []
    if not settings.storage_account:
        missing.append("STORAGE_ACCOUNT")
    if not settings.storage_access_key_str:
        missing.append("STORAGE_ACCESS_KEY")
    if missing:
        message = (
            "Static key authentication requires environment variables: "
            f"{', '.join(missing)}"
        )
        logger.critical(message, missing=missing)
        raise SystemExit(message)
