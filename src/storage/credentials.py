"""
Credential resolution for blob clients.

Two strategies are supported:
1. Static key - account name + shared access key (STORAGE_ACCOUNT/STORAGE_ACCESS_KEY)
2. Default chain - bearer token from the azure-identity default credential chain

Nothing is cached: every call resolves a fresh client.
"""

from azure.core.credentials import AccessToken, AzureNamedKeyCredential
from azure.core.exceptions import AzureError
from azure.identity.aio import DefaultAzureCredential
from azure.storage.blob.aio import BlobClient
import structlog

from src.config import Settings, get_settings
from src.models import CredentialMode, FetchRequest

logger = structlog.get_logger(__name__)


class StaticTokenCredential:
    """
    Async token credential that hands back one pre-fetched bearer token.

    Lets a blob client authenticate with a token obtained up front instead of
    holding on to the identity chain.
    """

    def __init__(self, token: AccessToken):
        self._token = token

    async def get_token(self, *scopes: str, **kwargs) -> AccessToken:
        return self._token

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> "StaticTokenCredential":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()


async def fetch_bearer_token(scope: str) -> AccessToken | None:
    """
    Request a bearer token from the default credential chain.

    Returns:
        The token, or None if no credential in the chain could provide one
    """
    try:
        async with DefaultAzureCredential() as credential:
            return await credential.get_token(scope)
    except AzureError as e:
        logger.error("Error getting token", scope=scope, error=str(e))
        return None


def _require_access_key(request: FetchRequest) -> str:
    if not request.access_key_str:
        message = (
            "Static key authentication requires an access key (STORAGE_ACCESS_KEY)"
        )
        logger.critical(message, account=request.account_name)
        raise SystemExit(message)
    return request.access_key_str


async def resolve_blob_client(
    request: FetchRequest,
    settings: Settings | None = None,
) -> BlobClient | None:
    """
    Resolve a blob client for the request's container and blob.

    Args:
        request: Fetch request naming the account, container and blob
        settings: Settings for endpoint and token scope (defaults to cached settings)

    Returns:
        A client bound to exactly one blob, or None if no credential could be
        resolved

    Raises:
        SystemExit: static key mode without an access key
    """
    settings = settings or get_settings()

    account_name = request.account_name
    if request.credential_mode == CredentialMode.STATIC_KEY:
        credential = AzureNamedKeyCredential(account_name, _require_access_key(request))
    else:
        token = await fetch_bearer_token(settings.storage_token_scope)
        if token is None:
            return None
        credential = StaticTokenCredential(token)

    logger.debug(
        "Resolved blob client",
        account=account_name,
        container=request.container_name,
        blob=request.blob_name,
        credential_mode=request.credential_mode.value,
    )
    return BlobClient(
        settings.account_url_for(account_name),
        container_name=request.container_name,
        blob_name=request.blob_name,
        credential=credential,
    )
