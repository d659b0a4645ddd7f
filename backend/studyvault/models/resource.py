"""Resource ORM — persists a study-material record owned by one identity.

Invariants:
    - id is UUID primary key (client-side default)
    - owner_id is set on creation and never updated
    - created_at immutable; updated_at refreshed by the store on every mutation
    - tags are stored as ordered child rows; order and duplicates preserved

Design Decisions:
    - Child table for tags over a JSON column: "any tag matches" stays a portable
      EXISTS query on SQLite and PostgreSQL, and the value column is indexable
    - Composite index (owner_id, created_at): every list query filters by owner
      and sorts by creation time
    - cascade delete-orphan on tag_rows: replacing tags drops the old rows
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import Uuid

from studyvault.core.domain_types import OWNER_ID_MAX_LENGTH
from studyvault.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResourceTag(Base):
    """One tag of a resource, at a fixed position."""
    __tablename__ = "resource_tags"
    __table_args__ = (
        Index("ix_resource_tags_value", "value"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    resource_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    value: Mapped[str] = mapped_column(String(20), nullable=False)

    resource: Mapped["Resource"] = relationship(
        "Resource", back_populates="tag_rows",
    )


class Resource(Base):
    """Study resource — note, assignment, link or file."""
    __tablename__ = "resources"
    __table_args__ = (
        Index("ix_resources_owner_created", "owner_id", "created_at"),
        Index("ix_resources_subject", "subject"),
        Index("ix_resources_type", "type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[str] = mapped_column(
        String(OWNER_ID_MAX_LENGTH), nullable=False,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    subject: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    tag_rows: Mapped[list[ResourceTag]] = relationship(
        ResourceTag, back_populates="resource",
        order_by=ResourceTag.position,
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        return [row.value for row in self.tag_rows]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        self.tag_rows = [
            ResourceTag(position=i, value=v) for i, v in enumerate(values)
        ]
