"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - OwnerId wraps the identity string from the bearer credential
    - ResourceId wraps UUIDs — never use bare UUID in domain logic
    - All valid resource types encoded as an Enum — no raw string matching
    - AuthIdentity lives for one request only; never persisted

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

OwnerId = NewType("OwnerId", str)
ResourceId = NewType("ResourceId", UUID)


@dataclass(frozen=True)
class AuthIdentity:
    """Caller identity decoded from a verified bearer credential."""
    id: OwnerId
    email: str
    name: str


# ─── Field Bounds ────────────────────────────────────────────────

TITLE_MAX_LENGTH = 100
SUBJECT_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 500
FILE_NAME_MAX_LENGTH = 100
TAG_MAX_LENGTH = 20
MAX_TAGS = 10
OWNER_ID_MAX_LENGTH = 64


# ─── Enums ───────────────────────────────────────────────────────

class ResourceType(str, Enum):
    """Study-material kinds. LINK requires url, FILE requires fileUrl."""
    NOTE = "note"
    ASSIGNMENT = "assignment"
    LINK = "link"
    FILE = "file"


# ─── Query Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class ResourceFilters:
    """Optional list filters. None means "not filtered"."""
    subject: str | None = None
    type: str | None = None
    search: str | None = None
