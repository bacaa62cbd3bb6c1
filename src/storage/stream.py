"""
Chunked blob stream.

Reads a blob as a sequence of fixed-size ranged requests in strictly
increasing offset order. Each range is reported as a ChunkResult so callers
can log a failed range and move on to the next one.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass

from azure.core.exceptions import AzureError
from azure.storage.blob.aio import BlobClient


@dataclass(frozen=True)
class ChunkResult:
    """Outcome of reading one range of a blob."""

    offset: int
    data: bytes | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChunkedStream:
    """
    Lazy, finite, single-use stream of blob chunks.

    The blob size is read once up front; if that fails the stream yields the
    failure and ends, since the ranges to request are unknown.
    """

    def __init__(self, blob_client: BlobClient, chunk_size: int):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.blob_client = blob_client
        self.chunk_size = chunk_size
        self._consumed = False

    def __aiter__(self) -> AsyncIterator[ChunkResult]:
        if self._consumed:
            raise RuntimeError("ChunkedStream can only be consumed once")
        self._consumed = True
        return self._chunks()

    async def _chunks(self) -> AsyncIterator[ChunkResult]:
        try:
            props = await self.blob_client.get_blob_properties()
        except AzureError as e:
            yield ChunkResult(offset=0, error=e)
            return

        size = props.size
        if size == 0:
            yield ChunkResult(offset=0, data=b"")
            return

        for offset in range(0, size, self.chunk_size):
            length = min(self.chunk_size, size - offset)
            try:
                downloader = await self.blob_client.download_blob(offset=offset, length=length)
                data = await downloader.readall()
            except AzureError as e:
                yield ChunkResult(offset=offset, error=e)
                continue
            yield ChunkResult(offset=offset, data=data)
