"""
Shared fixtures and Azure client fakes.
"""

from types import SimpleNamespace

import pytest
from azure.core.exceptions import HttpResponseError, ServiceRequestError

from src.config import Settings


class FakeDownloader:
    """Stands in for StorageStreamDownloader."""

    def __init__(self, data: bytes):
        self._data = data

    async def readall(self) -> bytes:
        return self._data


class FakeBlobClient:
    """
    In-memory async blob client.

    Records every ranged request so tests can check what went over the wire.
    """

    def __init__(
        self,
        data: bytes = b"",
        fail_offsets: tuple[int, ...] = (),
        fail_properties: bool = False,
    ):
        self.data = data
        self.fail_offsets = set(fail_offsets)
        self.fail_properties = fail_properties
        self.requests: list[tuple[int, int]] = []
        self.closed = False

    async def get_blob_properties(self):
        if self.fail_properties:
            raise HttpResponseError(message="BlobNotFound")
        return SimpleNamespace(size=len(self.data))

    async def download_blob(self, offset: int, length: int) -> FakeDownloader:
        self.requests.append((offset, length))
        if offset in self.fail_offsets:
            raise ServiceRequestError(f"connection reset at {offset}")
        return FakeDownloader(self.data[offset:offset + length])

    async def close(self) -> None:
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()


@pytest.fixture
def settings() -> Settings:
    """Settings with a static key and no env file lookups."""
    return Settings(
        _env_file=None,
        storage_account="devaccount",
        storage_access_key="c2VjcmV0LWtleQ==",
        storage_account_url=None,
        fetch_chunk_size=0x2000,
        fetch_download_mode="first_chunk",
    )


@pytest.fixture
def keyless_settings() -> Settings:
    """Settings with neither STORAGE_ACCOUNT nor STORAGE_ACCESS_KEY."""
    return Settings(
        _env_file=None,
        storage_account=None,
        storage_access_key=None,
        storage_account_url=None,
    )


@pytest.fixture
def fake_blob() -> type[FakeBlobClient]:
    """Factory for in-memory blob clients."""
    return FakeBlobClient
