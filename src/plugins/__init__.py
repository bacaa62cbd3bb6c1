"""
Host plugins.
"""

from src.plugins.container import CONTENT_ATTR, ContainerPlugin

__all__ = ["CONTENT_ATTR", "ContainerPlugin"]
