"""Resource Routes — HTTP surface for owner-scoped study resources.

Invariants:
    - Routes never contain business logic: every call delegates to ResourceService
    - The raw Authorization header is passed through; AuthGate decides
    - Write bodies are handed over as raw bytes and decoded only after the
      caller is authenticated, so a bad body never masks a 401

Design Decisions:
    - ResourceService read from app.state: built once in the lifespan
      (ADR: explicit wiring, no module-level singletons)
    - resource_id taken as str so malformed ids reach the service and map to 400
"""

from fastapi import APIRouter, Depends, Header, Query, Request, status

from studyvault.schemas.resource import (
    DeleteResponse, ResourceListResponse, ResourceResponse,
)
from studyvault.services.resource_service import ResourceService

router = APIRouter(prefix="/api/resources", tags=["resources"])


def get_resource_service(request: Request) -> ResourceService:
    """FastAPI dependency for the per-process ResourceService."""
    return request.app.state.resource_service


@router.get("", response_model=ResourceListResponse)
async def list_resources(
    subject: str | None = Query(None),
    type: str | None = Query(None),
    search: str | None = Query(None),
    page: str = Query("1"),
    limit: str = Query("10"),
    authorization: str | None = Header(None),
    service: ResourceService = Depends(get_resource_service),
):
    """List the caller's resources, newest first, filtered and paginated."""
    return await service.list_resources(
        authorization,
        subject=subject, type=type, search=search, page=page, limit=limit,
    )


@router.post(
    "", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED,
)
async def create_resource(
    request: Request,
    authorization: str | None = Header(None),
    service: ResourceService = Depends(get_resource_service),
):
    """Create a resource owned by the caller."""
    return await service.create_resource(authorization, await request.body())


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: str,
    authorization: str | None = Header(None),
    service: ResourceService = Depends(get_resource_service),
):
    """Fetch one of the caller's resources."""
    return await service.get_resource(authorization, resource_id)


@router.put("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: str,
    request: Request,
    authorization: str | None = Header(None),
    service: ResourceService = Depends(get_resource_service),
):
    """Partially update one of the caller's resources."""
    return await service.update_resource(
        authorization, resource_id, await request.body(),
    )


@router.delete("/{resource_id}", response_model=DeleteResponse)
async def delete_resource(
    resource_id: str,
    authorization: str | None = Header(None),
    service: ResourceService = Depends(get_resource_service),
):
    """Permanently delete one of the caller's resources."""
    return await service.delete_resource(authorization, resource_id)
