"""Resource Store — owner-scoped persistence and queries for study resources.

Invariants:
    - Every operation filters by owner_id: another owner's record is
      indistinguishable from a missing one (None / False, never an error)
    - Each write touches exactly one resource inside its own session and commit
    - find_many sorts by created_at desc (id desc breaks ties); total ignores paging
    - A page whose offset exceeds the signed 64-bit range is empty; total still counts
    - update_one overwrites only the given fields and refreshes updated_at

Design Decisions:
    - Receives the DatabaseSessionManager in its constructor (ADR: store client
      built once at startup and passed in, no global lookup)
    - Substring filters use LIKE with autoescape: user text is matched literally
    - No version column: concurrent updates are last-write-wins
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import ColumnElement, String, func, or_, select

from studyvault.core.domain_types import OwnerId, ResourceFilters, ResourceId
from studyvault.infrastructure.database import DatabaseSessionManager
from studyvault.models.resource import Resource, ResourceTag

logger = logging.getLogger(__name__)

MAX_SQL_OFFSET = 2**63 - 1

UPDATABLE_FIELDS = frozenset({
    "title", "subject", "type", "description",
    "url", "file_url", "file_name", "tags", "is_public",
})


class ResourceStore:
    """CRUD with query over resources, always scoped by owner."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, owner_id: OwnerId, fields: dict[str, Any]) -> Resource:
        """Insert a validated resource. id and timestamps are assigned here."""
        now = datetime.now(timezone.utc)
        resource = Resource(
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            **_writable(fields),
        )
        async with self._db.session() as db:
            db.add(resource)
            await db.commit()
        logger.info(
            "Resource created",
            extra={"owner_id": owner_id, "resource_id": str(resource.id)},
        )
        return resource

    async def find_one(
        self, owner_id: OwnerId, resource_id: ResourceId,
    ) -> Resource | None:
        async with self._db.session() as db:
            result = await db.execute(_owned(owner_id, resource_id))
            return result.scalar_one_or_none()

    async def find_many(
        self,
        owner_id: OwnerId,
        filters: ResourceFilters | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Resource], int]:
        """Page through the owner's resources, newest first."""
        conditions = _filter_conditions(owner_id, filters or ResourceFilters())
        offset = (page - 1) * limit
        query = (
            select(Resource)
            .where(*conditions)
            .order_by(Resource.created_at.desc(), Resource.id.desc())
            .offset(offset)
            .limit(limit)
        )
        count_query = (
            select(func.count()).select_from(Resource).where(*conditions)
        )
        async with self._db.session() as db:
            records = []
            if offset <= MAX_SQL_OFFSET:
                records = list((await db.execute(query)).scalars().all())
            total = (await db.execute(count_query)).scalar_one()
        return records, total

    async def update_one(
        self, owner_id: OwnerId, resource_id: ResourceId, fields: dict[str, Any],
    ) -> Resource | None:
        """Overwrite only the given fields. None if not found or not owned."""
        async with self._db.session() as db:
            result = await db.execute(_owned(owner_id, resource_id))
            resource = result.scalar_one_or_none()
            if resource is None:
                return None
            for name, value in _writable(fields).items():
                setattr(resource, name, value)
            resource.updated_at = datetime.now(timezone.utc)
            await db.commit()
        logger.info(
            "Resource updated",
            extra={"owner_id": owner_id, "resource_id": str(resource_id)},
        )
        return resource

    async def delete_one(
        self, owner_id: OwnerId, resource_id: ResourceId,
    ) -> bool:
        """Permanently remove the record. False if not found or not owned."""
        async with self._db.session() as db:
            result = await db.execute(_owned(owner_id, resource_id))
            resource = result.scalar_one_or_none()
            if resource is None:
                return False
            await db.delete(resource)
            await db.commit()
        logger.info(
            "Resource deleted",
            extra={"owner_id": owner_id, "resource_id": str(resource_id)},
        )
        return True


def _owned(owner_id: OwnerId, resource_id: ResourceId):
    return select(Resource).where(
        Resource.id == resource_id, Resource.owner_id == owner_id,
    )


def _writable(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}


def _contains(column, term: str) -> ColumnElement[bool]:
    """Case-insensitive literal substring match."""
    return func.lower(column, type_=String).contains(
        term.lower(), autoescape=True,
    )


def _filter_conditions(
    owner_id: OwnerId, filters: ResourceFilters,
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [Resource.owner_id == owner_id]
    if filters.subject:
        conditions.append(_contains(Resource.subject, filters.subject))
    if filters.type:
        conditions.append(Resource.type == filters.type)
    if filters.search:
        conditions.append(or_(
            _contains(Resource.title, filters.search),
            _contains(Resource.description, filters.search),
            Resource.tag_rows.any(_contains(ResourceTag.value, filters.search)),
        ))
    return conditions
