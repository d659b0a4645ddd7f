"""Error hierarchy — status codes and public response envelopes."""

import pytest

from studyvault.core.errors import (
    AuthenticationError,
    DatabaseError,
    ErrorContext,
    InternalServiceError,
    InvalidResourceIdError,
    ResourceNotFoundError,
    ResourceValidationError,
    StudyVaultError,
)


@pytest.mark.parametrize("error, status, body", [
    (AuthenticationError(), 401, {"error": "Unauthorized"}),
    (ResourceValidationError("Title is required", "title"), 400, {"error": "Title is required"}),
    (InvalidResourceIdError("xyz"), 400, {"error": "Invalid resource ID"}),
    (ResourceNotFoundError("abc"), 404, {"error": "Resource not found"}),
    (InternalServiceError("Resource get failed"), 500, {"error": "Internal server error"}),
])
def test_status_and_envelope(error, status, body):
    assert isinstance(error, StudyVaultError)
    assert error.http_status == status
    assert error.to_response() == body


def test_database_error_hides_driver_detail():
    error = DatabaseError("password authentication failed", "execute")
    assert error.http_status == 500
    assert "password" in error.message
    assert error.to_response() == {"error": "Internal server error"}


def test_context_carries_owner_and_resource():
    ctx = ErrorContext(owner_id="alice", resource_id="r-1")
    error = ResourceNotFoundError("r-1", ctx)
    assert error.context.owner_id == "alice"
    assert error.context.resource_id == "r-1"
    assert error.context.timestamp is not None
