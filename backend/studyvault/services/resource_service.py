"""Resource Service — per-request orchestration: AuthGate → validation → store.

Invariants:
    - Authentication runs first on every operation; no identity → AuthenticationError
    - The store is always called with the authenticated identity's id as owner_id
    - Validation failures surface the single first-failure message verbatim
    - Raw request bodies are decoded after authentication; undecodable or
      empty bodies are a validation failure on field "body"
    - Not found and owned-by-someone-else produce the same ResourceNotFoundError
    - Unexpected failures are logged here and re-raised as InternalServiceError
      (generic public message, no detail leaked, no retry)

Design Decisions:
    - Raises typed StudyVaultError subclasses; the API error handlers own the
      HTTP translation (ADR: uniform error shape)
    - Collaborators injected through the constructor, built once at startup
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from studyvault.core.auth_gate import AuthGate
from studyvault.core.domain_types import (
    AuthIdentity, ResourceFilters, ResourceId,
)
from studyvault.core.errors import (
    AuthenticationError,
    ErrorContext,
    InternalServiceError,
    InvalidResourceIdError,
    ResourceNotFoundError,
    ResourceValidationError,
    StudyVaultError,
)
from studyvault.core.validation import (
    INVALID_BODY_MESSAGE, InvalidResource, validate_resource_payload,
)
from studyvault.schemas.resource import (
    DeleteResponse,
    PaginationMeta,
    ResourceListResponse,
    ResourceResponse,
)
from studyvault.services.resource_store import ResourceStore

logger = logging.getLogger(__name__)


class ResourceService:
    """Externally visible surface of the resource core."""

    def __init__(
        self,
        auth_gate: AuthGate,
        store: ResourceStore,
        default_page_limit: int = 10,
        max_page_limit: int = 100,
    ):
        self._auth = auth_gate
        self._store = store
        self._default_limit = default_page_limit
        self._max_limit = max_page_limit

    async def create_resource(
        self, authorization: str | None, payload: Any,
    ) -> ResourceResponse:
        identity = self._authenticate(authorization)
        fields = self._validate(payload, identity, partial=False)
        async with self._internal_errors("create", identity):
            resource = await self._store.create(identity.id, fields)
        return ResourceResponse.model_validate(resource)

    async def list_resources(
        self,
        authorization: str | None,
        *,
        subject: str | None = None,
        type: str | None = None,
        search: str | None = None,
        page: str | None = None,
        limit: str | None = None,
    ) -> ResourceListResponse:
        identity = self._authenticate(authorization)
        page_number = _parse_positive_int(page, 1, "page", "Page")
        page_size = min(
            _parse_positive_int(limit, self._default_limit, "limit", "Limit"),
            self._max_limit,
        )
        filters = ResourceFilters(
            subject=subject or None, type=type or None, search=search or None,
        )
        async with self._internal_errors("list", identity):
            records, total = await self._store.find_many(
                identity.id, filters, page=page_number, limit=page_size,
            )
        return ResourceListResponse(
            resources=[ResourceResponse.model_validate(r) for r in records],
            pagination=PaginationMeta.build(page_number, page_size, total),
        )

    async def get_resource(
        self, authorization: str | None, resource_id: str,
    ) -> ResourceResponse:
        identity = self._authenticate(authorization)
        rid = _parse_resource_id(resource_id)
        async with self._internal_errors("get", identity, resource_id):
            resource = await self._store.find_one(identity.id, rid)
        if resource is None:
            raise ResourceNotFoundError(resource_id, _context(identity, resource_id))
        return ResourceResponse.model_validate(resource)

    async def update_resource(
        self, authorization: str | None, resource_id: str, payload: Any,
    ) -> ResourceResponse:
        identity = self._authenticate(authorization)
        rid = _parse_resource_id(resource_id)
        fields = self._validate(payload, identity, partial=True)
        async with self._internal_errors("update", identity, resource_id):
            resource = await self._store.update_one(identity.id, rid, fields)
        if resource is None:
            raise ResourceNotFoundError(resource_id, _context(identity, resource_id))
        return ResourceResponse.model_validate(resource)

    async def delete_resource(
        self, authorization: str | None, resource_id: str,
    ) -> DeleteResponse:
        identity = self._authenticate(authorization)
        rid = _parse_resource_id(resource_id)
        async with self._internal_errors("delete", identity, resource_id):
            deleted = await self._store.delete_one(identity.id, rid)
        if not deleted:
            raise ResourceNotFoundError(resource_id, _context(identity, resource_id))
        return DeleteResponse()

    def _authenticate(self, authorization: str | None) -> AuthIdentity:
        identity = self._auth.identify(authorization)
        if identity is None:
            raise AuthenticationError()
        return identity

    def _validate(
        self, payload: Any, identity: AuthIdentity, partial: bool,
    ) -> dict[str, Any]:
        if isinstance(payload, (bytes, bytearray)):
            payload = _decode_body(payload, identity)
        result = validate_resource_payload(payload, partial=partial)
        if isinstance(result, InvalidResource):
            raise ResourceValidationError(
                result.message, result.field, _context(identity),
            )
        return result.fields

    @asynccontextmanager
    async def _internal_errors(
        self,
        operation: str,
        identity: AuthIdentity,
        resource_id: str | None = None,
    ):
        """Pass domain errors through; wrap anything else as InternalServiceError."""
        try:
            yield
        except StudyVaultError:
            raise
        except Exception as e:
            logger.error(
                f"Resource {operation} failed: {e}",
                exc_info=True,
                extra={
                    "owner_id": identity.id,
                    "resource_id": resource_id,
                    "operation": operation,
                },
            )
            raise InternalServiceError(
                f"Resource {operation} failed",
                ErrorContext(
                    owner_id=identity.id,
                    resource_id=resource_id,
                    operation=operation,
                ),
            ) from e


def _context(identity: AuthIdentity, resource_id: str | None = None) -> ErrorContext:
    return ErrorContext(owner_id=identity.id, resource_id=resource_id)


def _decode_body(raw: bytes, identity: AuthIdentity) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        raise ResourceValidationError(
            INVALID_BODY_MESSAGE, "body", _context(identity),
        )


def _parse_resource_id(resource_id: str) -> ResourceId:
    try:
        return ResourceId(UUID(str(resource_id)))
    except ValueError:
        raise InvalidResourceIdError(resource_id)


def _parse_positive_int(
    raw: str | None, default: int, field: str, label: str,
) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        raise ResourceValidationError(
            f"{label} must be a positive integer", field,
        )
    return value
