"""Pydantic models for Microsoft Graph drive payloads."""

from __future__ import annotations

from typing import Any, Dict, Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

CONFLICT_RENAME = "rename"


class FolderFacet(BaseModel):
    child_count: int | None = Field(None, alias="childCount")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class DriveItem(BaseModel):
    """A file or folder returned by the drive endpoints."""

    id: str
    name: str | None = None
    size: int | None = None
    web_url: str | None = Field(None, alias="webUrl")
    folder: FolderFacet | None = None
    file: Dict[str, Any] | None = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def is_folder(self) -> bool:
        return self.folder is not None


class ItemUpdate(BaseModel):
    """Delta body for PATCH requests; unset fields are never sent."""

    name: str | None = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class FolderCreate(BaseModel):
    name: str
    folder: FolderFacet = Field(default_factory=FolderFacet)
    conflict_behavior: str = Field(CONFLICT_RENAME, alias="conflictBehavior")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class GraphResponse(BaseModel, Generic[T]):
    """Decoded value of a Graph call together with the raw HTTP response."""

    value: T
    raw: httpx.Response | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def status_code(self) -> int | None:
        return self.raw.status_code if self.raw is not None else None


__all__ = [
    "CONFLICT_RENAME",
    "DriveItem",
    "FolderCreate",
    "FolderFacet",
    "GraphResponse",
    "ItemUpdate",
]
