"""
Azure Blob Storage integration.
"""

from src.storage.blob import BlobFetcher
from src.storage.credentials import StaticTokenCredential, resolve_blob_client
from src.storage.stream import ChunkedStream, ChunkResult

__all__ = [
    "BlobFetcher",
    "ChunkedStream",
    "ChunkResult",
    "StaticTokenCredential",
    "resolve_blob_client",
]
