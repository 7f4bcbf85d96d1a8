"""Microsoft Graph client, settings and wire models."""

from .client import GraphClient
from .config import GraphSettings
from .errors import GraphError, RequestFailed
from .models import DriveItem, FolderCreate, GraphResponse, ItemUpdate

__all__ = [
    "GraphClient",
    "GraphSettings",
    "GraphError",
    "RequestFailed",
    "DriveItem",
    "FolderCreate",
    "GraphResponse",
    "ItemUpdate",
]
