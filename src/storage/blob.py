"""
Azure Blob Storage fetcher.
"""

from contextlib import aclosing

from azure.storage.blob.aio import BlobClient
import structlog

from src.config import Settings, get_settings
from src.models import DownloadMode, FetchRequest
from src.models.request import DEFAULT_CHUNK_SIZE
from src.storage.credentials import resolve_blob_client
from src.storage.stream import ChunkedStream

logger = structlog.get_logger(__name__)


class BlobFetcher:
    """
    Downloads one blob per call: resolve a client, stream chunks, accumulate.

    Every failure is logged and reported as None; callers only see whether
    content came back.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def download(
        self,
        blob_client: BlobClient,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        mode: DownloadMode = DownloadMode.FIRST_CHUNK,
    ) -> bytes | None:
        """
        Stream a blob in fixed-size chunks.

        Args:
            blob_client: Client bound to the blob to read
            chunk_size: Bytes per ranged request
            mode: FIRST_CHUNK publishes after the first successful chunk,
                FULL reads the whole stream first

        Returns:
            Accumulated bytes, or None if no chunk succeeded (FULL mode also
            returns None if any chunk failed)
        """
        accumulated = bytearray()
        received = 0
        failed = 0

        async with aclosing(aiter(ChunkedStream(blob_client, chunk_size))) as chunks:
            async for chunk in chunks:
                if not chunk.ok:
                    failed += 1
                    logger.error(
                        "Error getting content from blob",
                        offset=chunk.offset,
                        error=str(chunk.error),
                    )
                    continue

                accumulated.extend(chunk.data)
                received += 1

                if mode == DownloadMode.FIRST_CHUNK:
                    return bytes(accumulated)

        if received == 0:
            logger.warning("Blob stream ended without content", failed_chunks=failed)
            return None

        if failed:
            logger.error(
                "Discarding incomplete blob content",
                received_chunks=received,
                failed_chunks=failed,
            )
            return None

        return bytes(accumulated)

    async def fetch(self, request: FetchRequest) -> bytes | None:
        """
        Resolve a client for the request and download the blob.

        Raises:
            SystemExit: static key mode without an access key
        """
        blob_client = await resolve_blob_client(request, self.settings)
        if blob_client is None:
            return None

        async with blob_client:
            content = await self.download(
                blob_client,
                chunk_size=request.chunk_size,
                mode=request.download_mode,
            )

        if content is not None:
            logger.info(
                "Fetched blob",
                container=request.container_name,
                blob=request.blob_name,
                size=len(content),
                mode=request.download_mode.value,
            )
        return content
