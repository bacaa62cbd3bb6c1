"""
Container plugin: fetches a blob's content into the host execution context.
"""

import asyncio

import structlog

from src.config import Settings, get_settings
from src.models import ExecutionContext, FetchRequest
from src.storage import BlobFetcher

logger = structlog.get_logger(__name__)

CONTENT_ATTR = "content"


class ContainerPlugin:
    """
    Host plugin binding for blob fetches.

    Reads `container_name`, `blob_name`, `account_name` and the
    `use_default_credentials` flag from the context and writes the blob bytes
    to the `content` binary attribute.
    """

    symbol = "container"
    description = (
        "Fetches content for a blob from a container w/ `container_name` "
        "and blob w/ `blob_name`"
    )
    caveats = (
        "Uses the environment variables STORAGE_ACCOUNT/STORAGE_ACCESS_KEY to authenticate"
    )

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.fetcher = BlobFetcher(self.settings)

    async def call_with_context(self, context: ExecutionContext) -> ExecutionContext | None:
        """
        Fetch the blob named by the context.

        Returns:
            The context with `content` set, or None if nothing was fetched
        """
        request = FetchRequest.from_context(context, self.settings)
        if request is None:
            return None

        content = await self.fetcher.fetch(request)
        if content is None:
            logger.warning(
                "No content fetched",
                container=request.container_name,
                blob=request.blob_name,
            )
            return None

        context.add_binary_attr(CONTENT_ATTR, content)
        return context

    def run(self, context: ExecutionContext) -> ExecutionContext | None:
        """
        Run call_with_context on a fresh event loop.

        For hosts without a running event loop; asyncio.run raises
        RuntimeError when called from inside one, so async hosts should await
        call_with_context directly.

        Raises:
            SystemExit: static key mode without STORAGE_ACCOUNT or STORAGE_ACCESS_KEY
        """
        return asyncio.run(self.call_with_context(context))
