"""
Pydantic models and context types for blob fetches.
"""

from src.models.context import ExecutionContext
from src.models.request import CredentialMode, DownloadMode, FetchRequest

__all__ = [
    "CredentialMode",
    "DownloadMode",
    "ExecutionContext",
    "FetchRequest",
]
