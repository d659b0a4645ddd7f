"""Resource Service — orchestration of auth, validation and store outcomes.

Tests cover:
    - every operation rejects missing/invalid credentials before touching the
      store or decoding the body
    - validation failures surface the first message and write nothing
    - not found and not owned map to the same ResourceNotFoundError
    - malformed ids map to InvalidResourceIdError
    - list pagination metadata (pages = ceil(total/limit)), defaults, limit cap
    - unexpected store failures become InternalServiceError
"""

import json

import pytest
from uuid import uuid4

from studyvault.core.auth_gate import AuthGate
from studyvault.core.errors import (
    AuthenticationError,
    DatabaseError,
    InternalServiceError,
    InvalidResourceIdError,
    ResourceNotFoundError,
    ResourceValidationError,
)
from studyvault.services.resource_service import ResourceService

from tests.support import TEST_SECRET, bearer, make_payload

ALICE = bearer("alice")
BOB = bearer("bob")


# ─── authentication ─────────────────────────────────────────────

async def test_create_without_credential_is_rejected(service, store):
    with pytest.raises(AuthenticationError):
        await service.create_resource(None, make_payload())
    _, total = await store.find_many("alice")
    assert total == 0


async def test_token_signed_with_other_secret_is_rejected(service):
    forged = bearer("alice", secret="not-the-secret")
    with pytest.raises(AuthenticationError):
        await service.list_resources(forged)


async def test_expired_token_is_rejected(service):
    expired = bearer("alice", expires_in=-60)
    with pytest.raises(AuthenticationError):
        await service.get_resource(expired, str(uuid4()))


async def test_auth_checked_before_id_format(service):
    with pytest.raises(AuthenticationError):
        await service.delete_resource("Bearer nope", "not-a-uuid")


async def test_overlong_owner_id_is_rejected(service, store):
    with pytest.raises(AuthenticationError):
        await service.create_resource(bearer("x" * 65), make_payload())
    _, total = await store.find_many("x" * 65)
    assert total == 0


async def test_auth_checked_before_body_is_decoded(service):
    with pytest.raises(AuthenticationError):
        await service.create_resource(None, b"{not json")
    with pytest.raises(AuthenticationError):
        await service.update_resource(None, str(uuid4()), b"")


# ─── create ─────────────────────────────────────────────────────

async def test_create_returns_resource_owned_by_caller(service):
    created = await service.create_resource(ALICE, make_payload())
    assert created.owner_id == "alice"
    assert created.title == "Linear Algebra Notes"
    assert created.tags == ["matrices", "exam"]
    assert created.is_public is False


async def test_create_from_raw_json_bytes(service):
    created = await service.create_resource(
        ALICE, json.dumps(make_payload()).encode(),
    )
    assert created.title == "Linear Algebra Notes"


@pytest.mark.parametrize("raw", [b"", b"{not json", b"\x80\x81"])
async def test_undecodable_body_is_validation_error(service, raw):
    with pytest.raises(ResourceValidationError) as exc:
        await service.create_resource(ALICE, raw)
    assert exc.value.message == "Invalid request data"
    assert exc.value.field == "body"


async def test_create_link_without_url_fails_and_writes_nothing(service, store):
    with pytest.raises(ResourceValidationError) as exc:
        await service.create_resource(ALICE, make_payload(type="link"))
    assert exc.value.message == "URL is required for link type resources"
    _, total = await store.find_many("alice")
    assert total == 0


async def test_create_with_eleven_tags_fails(service, store):
    tags = [f"t{i}" for i in range(11)]
    with pytest.raises(ResourceValidationError) as exc:
        await service.create_resource(ALICE, make_payload(tags=tags))
    assert exc.value.message == "Cannot have more than 10 tags"
    _, total = await store.find_many("alice")
    assert total == 0


async def test_create_sanitizes_description(service):
    created = await service.create_resource(
        ALICE, make_payload(description="<script>alert(1)</script>hello"),
    )
    assert created.description == "scriptalert(1)/scripthello"


# ─── get / update / delete ──────────────────────────────────────

async def test_get_other_owners_resource_is_not_found(service):
    created = await service.create_resource(ALICE, make_payload())
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.get_resource(BOB, str(created.id))
    assert exc.value.message == "Resource not found"


async def test_missing_and_foreign_ids_look_identical(service):
    created = await service.create_resource(ALICE, make_payload())
    with pytest.raises(ResourceNotFoundError) as foreign:
        await service.get_resource(BOB, str(created.id))
    with pytest.raises(ResourceNotFoundError) as missing:
        await service.get_resource(BOB, str(uuid4()))
    assert foreign.value.to_response() == missing.value.to_response()


async def test_malformed_id_is_bad_request(service):
    with pytest.raises(InvalidResourceIdError):
        await service.get_resource(ALICE, "507f1f77bcf86cd79943901")


async def test_update_is_partial(service):
    created = await service.create_resource(ALICE, make_payload())

    updated = await service.update_resource(ALICE, str(created.id), {"title": "X"})

    assert updated.title == "X"
    assert updated.subject == created.subject
    assert updated.type == created.type
    assert updated.tags == created.tags
    assert updated.updated_at > created.updated_at


async def test_update_switching_to_link_requires_url(service):
    created = await service.create_resource(ALICE, make_payload())
    with pytest.raises(ResourceValidationError) as exc:
        await service.update_resource(ALICE, str(created.id), {"type": "link"})
    assert exc.value.message == "URL is required for link type resources"


async def test_update_foreign_resource_is_not_found(service):
    created = await service.create_resource(ALICE, make_payload())
    with pytest.raises(ResourceNotFoundError):
        await service.update_resource(BOB, str(created.id), {"title": "X"})
    still = await service.get_resource(ALICE, str(created.id))
    assert still.title == "Linear Algebra Notes"


async def test_delete_then_get_is_not_found(service):
    created = await service.create_resource(ALICE, make_payload())

    result = await service.delete_resource(ALICE, str(created.id))

    assert result.message == "Resource deleted successfully"
    with pytest.raises(ResourceNotFoundError):
        await service.get_resource(ALICE, str(created.id))


# ─── list ───────────────────────────────────────────────────────

async def test_list_pagination_metadata(service):
    for i in range(25):
        await service.create_resource(ALICE, make_payload(title=f"Note {i}"))

    first = await service.list_resources(ALICE, page="1", limit="10")
    last = await service.list_resources(ALICE, page="3", limit="10")

    assert len(first.resources) == 10
    assert first.pagination.total == 25
    assert first.pagination.pages == 3
    assert len(last.resources) == 5
    assert last.pagination.page == 3


async def test_list_defaults_to_first_page_of_ten(service):
    for i in range(12):
        await service.create_resource(ALICE, make_payload(title=f"Note {i}"))

    result = await service.list_resources(ALICE)

    assert result.pagination.page == 1
    assert result.pagination.limit == 10
    assert len(result.resources) == 10


async def test_list_empty_has_zero_pages(service):
    result = await service.list_resources(ALICE)
    assert result.resources == []
    assert result.pagination.total == 0
    assert result.pagination.pages == 0


async def test_list_caps_limit(store):
    capped = ResourceService(AuthGate(TEST_SECRET), store, max_page_limit=5)
    result = await capped.list_resources(ALICE, limit="50")
    assert result.pagination.limit == 5


@pytest.mark.parametrize("page", ["0", "-1", "abc"])
async def test_list_rejects_bad_page(service, page):
    with pytest.raises(ResourceValidationError) as exc:
        await service.list_resources(ALICE, page=page)
    assert exc.value.message == "Page must be a positive integer"


async def test_list_empty_filters_are_ignored(service):
    await service.create_resource(ALICE, make_payload())
    result = await service.list_resources(ALICE, subject="", type="", search="")
    assert result.pagination.total == 1


# ─── internal failures ──────────────────────────────────────────

async def test_unexpected_store_failure_becomes_internal_error(service, store, monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr(store, "find_one", boom)

    with pytest.raises(InternalServiceError) as exc:
        await service.get_resource(ALICE, str(uuid4()))
    assert exc.value.to_response() == {"error": "Internal server error"}


async def test_database_error_passes_through(service, store, monkeypatch):
    async def boom(*args, **kwargs):
        raise DatabaseError("Connection or operational error", "execute")

    monkeypatch.setattr(store, "create", boom)

    with pytest.raises(DatabaseError):
        await service.create_resource(ALICE, make_payload())
