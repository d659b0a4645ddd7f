"""Auth Gate — verifies bearer credentials and extracts the caller identity.

Invariants:
    - identify()/verify() NEVER raise: any failure yields None ("no identity")
    - No IO: signature and expiry checked locally against the shared secret
    - Identity id comes from the "id" claim, falling back to "sub"
    - Ids longer than OWNER_ID_MAX_LENGTH yield no identity (they cannot be stored)

Design Decisions:
    - Optional result over exceptions: anonymous is an expected outcome, callers
      branch on presence (ADR: no exception-driven control flow for auth)
    - python-jose for HS256 verification; expiry enforced by jwt.decode
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from jose import JWTError, jwt

from studyvault.core.domain_types import OWNER_ID_MAX_LENGTH, AuthIdentity, OwnerId

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an "Authorization: Bearer <token>" value."""
    if not authorization:
        return None
    parts = authorization.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    token = parts[1].strip()
    return token or None


def identity_from_claims(claims: Mapping[str, Any]) -> AuthIdentity | None:
    """Build an AuthIdentity from decoded claims; None if no usable id."""
    raw_id = claims.get("id") or claims.get("sub")
    if not isinstance(raw_id, (str, int)) or isinstance(raw_id, bool):
        return None
    owner_id = str(raw_id).strip()
    if not owner_id or len(owner_id) > OWNER_ID_MAX_LENGTH:
        return None
    email = claims.get("email")
    name = claims.get("name")
    return AuthIdentity(
        id=OwnerId(owner_id),
        email=email if isinstance(email, str) else "",
        name=name if isinstance(name, str) else "",
    )


class AuthGate:
    """Stateless bearer-token verifier bound to the server secret."""

    def __init__(self, secret: str, algorithms: Sequence[str] = ("HS256",)):
        self._secret = secret
        self._algorithms = list(algorithms)

    def identify(self, authorization: str | None) -> AuthIdentity | None:
        """Resolve a raw Authorization header to an identity, or None."""
        token = extract_bearer_token(authorization)
        if token is None:
            return None
        return self.verify(token)

    def verify(self, token: str) -> AuthIdentity | None:
        """Verify signature and expiry, then decode the identity claims."""
        try:
            claims = jwt.decode(token, self._secret, algorithms=self._algorithms)
        except JWTError as e:
            logger.info(f"Bearer credential rejected: {e}")
            return None
        return identity_from_claims(claims)
