"""Resource Schemas — Pydantic response models for the resource API.

Invariants:
    - JSON field names are camelCase (fileUrl, isPublic, ownerId, createdAt)
    - Built from ORM objects via from_attributes; never exposes tag rows
    - pages = ceil(total / limit), 0 when there are no records
    - Timestamps are serialized as UTC

Design Decisions:
    - Write bodies are NOT modeled here: the validation pipeline owns request
      checking so the caller gets a single first-failure message
"""

import math
from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class ResourceResponse(_CamelModel):
    """A stored resource as returned to its owner."""
    id: UUID
    title: str
    subject: str
    type: str
    description: str
    url: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    tags: list[str]
    owner_id: str
    is_public: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite drops tzinfo on read; stored values are always UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        return cls(
            page=page, limit=limit, total=total,
            pages=math.ceil(total / limit),
        )


class ResourceListResponse(BaseModel):
    resources: list[ResourceResponse]
    pagination: PaginationMeta


class DeleteResponse(BaseModel):
    message: str = "Resource deleted successfully"
