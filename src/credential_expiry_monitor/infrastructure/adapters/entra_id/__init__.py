"""Entra ID directory adapter."""

from .directory import EntraIdDirectoryService
from .graph_client import GraphClient, GraphClientConfig

__all__ = [
    "EntraIdDirectoryService",
    "GraphClient",
    "GraphClientConfig",
]
