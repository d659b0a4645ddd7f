"""Test support — bearer tokens minted like the account service, payload factory."""

import time

from jose import jwt

TEST_SECRET = "test-secret"


def mint_token(
    owner_id: str = "owner-a",
    *,
    secret: str = TEST_SECRET,
    expires_in: int = 3600,
    **claims,
) -> str:
    payload = {
        "id": owner_id,
        "email": f"{owner_id}@example.com",
        "name": owner_id.title(),
        "exp": int(time.time()) + expires_in,
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(owner_id: str = "owner-a", **kwargs) -> str:
    """Authorization header value for owner_id."""
    return f"Bearer {mint_token(owner_id, **kwargs)}"


def make_payload(**overrides) -> dict:
    """Valid note payload (JSON field names) with optional overrides."""
    payload = {
        "title": "Linear Algebra Notes",
        "subject": "Mathematics",
        "type": "note",
        "description": "Eigenvalues, eigenvectors and diagonalization.",
        "tags": ["matrices", "exam"],
    }
    payload.update(overrides)
    return payload
