"""Resource Validation Pipeline — ordered, declarative field rules for write payloads.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Rules run in declaration order: title → subject → type → description →
      url/fileUrl cross rule → tags → isPublic. First failure wins
    - Expected failures are returned as InvalidResource, never raised
    - ValidResource.fields uses storage names (file_url, is_public), sanitized

Design Decisions:
    - Rule objects over ad hoc if-chains: the order is data, testable on its own
    - Partial mode for updates: only keys present in the payload are checked
      and returned; the link/file requirement applies only when the patch sets type
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from studyvault.core.domain_types import (
    DESCRIPTION_MAX_LENGTH,
    FILE_NAME_MAX_LENGTH,
    MAX_TAGS,
    SUBJECT_MAX_LENGTH,
    TAG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ResourceType,
)
from studyvault.core.sanitize import sanitize_text, sanitize_url

HTTP_URL_PATTERN = re.compile(r"^https?://.+")

INVALID_BODY_MESSAGE = "Invalid request data"
TYPE_CHOICES_MESSAGE = "Type must be note, assignment, link, or file"


@dataclass(frozen=True)
class ValidResource:
    """Sanitized, normalized fields ready for the store."""
    fields: dict[str, Any]


@dataclass(frozen=True)
class InvalidResource:
    """First rule violation found in the payload."""
    field: str
    message: str


ValidationResult = ValidResource | InvalidResource


class FieldRule(Protocol):
    """One step of the pipeline: read payload, write normalized values to out."""
    field: str

    def apply(
        self, payload: Mapping[str, Any], out: dict[str, Any], partial: bool,
    ) -> str | None: ...


@dataclass(frozen=True)
class TextRule:
    """Required free-text field, sanitized then length-bounded."""
    field: str
    label: str
    max_length: int

    def apply(self, payload, out, partial):
        if self.field not in payload:
            return None if partial else f"{self.label} is required"
        value = payload[self.field]
        if value is None:
            return f"{self.label} is required"
        if not isinstance(value, str):
            return f"{self.label} must be a string"
        cleaned = sanitize_text(value)
        if not cleaned:
            return f"{self.label} is required"
        if len(cleaned) > self.max_length:
            return f"{self.label} cannot exceed {self.max_length} characters"
        out[self.field] = cleaned
        return None


@dataclass(frozen=True)
class TypeRule:
    """Resource type must be one of the enumerated kinds."""
    field: str = "type"

    def apply(self, payload, out, partial):
        if self.field not in payload:
            return None if partial else "Type is required"
        value = payload[self.field]
        if value is None:
            return "Type is required"
        try:
            out[self.field] = ResourceType(value).value
        except ValueError:
            return TYPE_CHOICES_MESSAGE
        return None


@dataclass(frozen=True)
class LinkTargetRule:
    """Cross-field rule: link needs url, file needs fileUrl; fileName bounded."""
    field: str = "url"

    def apply(self, payload, out, partial):
        resource_type = out.get("type")

        url, error = _read_url(payload, "url", "Invalid URL format")
        if error:
            return error
        if resource_type == ResourceType.LINK.value and not url:
            return "URL is required for link type resources"

        file_url, error = _read_url(payload, "fileUrl", "Invalid file URL format")
        if error:
            return error
        if resource_type == ResourceType.FILE.value and not file_url:
            return "File URL is required for file type resources"

        file_name = payload.get("fileName")
        if file_name is not None and not isinstance(file_name, str):
            return "File name must be a string"
        if file_name:
            file_name = sanitize_text(file_name)
            if len(file_name) > FILE_NAME_MAX_LENGTH:
                return f"File name cannot exceed {FILE_NAME_MAX_LENGTH} characters"

        for key, storage_key, value in (
            ("url", "url", url),
            ("fileUrl", "file_url", file_url),
            ("fileName", "file_name", file_name),
        ):
            if key in payload or not partial:
                out[storage_key] = value or None
        return None


@dataclass(frozen=True)
class TagsRule:
    """Ordered tag list: bounded count, bounded non-empty entries, duplicates kept."""
    field: str = "tags"

    def apply(self, payload, out, partial):
        if self.field not in payload:
            if not partial:
                out[self.field] = []
            return None
        raw = payload[self.field]
        if raw is None:
            out[self.field] = []
            return None
        if not isinstance(raw, list):
            return "Tags must be a list of strings"
        if len(raw) > MAX_TAGS:
            return f"Cannot have more than {MAX_TAGS} tags"
        tags = []
        for tag in raw:
            if not isinstance(tag, str):
                return "Tags must be a list of strings"
            cleaned = sanitize_text(tag)
            if not cleaned:
                return "Tag cannot be empty"
            if len(cleaned) > TAG_MAX_LENGTH:
                return f"Tag cannot exceed {TAG_MAX_LENGTH} characters"
            tags.append(cleaned)
        out[self.field] = tags
        return None


@dataclass(frozen=True)
class VisibilityRule:
    """Advisory isPublic flag, false unless given."""
    field: str = "isPublic"

    def apply(self, payload, out, partial):
        if self.field not in payload:
            if not partial:
                out["is_public"] = False
            return None
        value = payload[self.field]
        if not isinstance(value, bool):
            return "isPublic must be a boolean"
        out["is_public"] = value
        return None


RESOURCE_RULES: tuple[FieldRule, ...] = (
    TextRule("title", "Title", TITLE_MAX_LENGTH),
    TextRule("subject", "Subject", SUBJECT_MAX_LENGTH),
    TypeRule(),
    TextRule("description", "Description", DESCRIPTION_MAX_LENGTH),
    LinkTargetRule(),
    TagsRule(),
    VisibilityRule(),
)


def validate_resource_payload(
    payload: Any, *, partial: bool = False,
) -> ValidationResult:
    """Run every rule in order. Returns the first failure or the normalized fields."""
    if not isinstance(payload, Mapping):
        return InvalidResource("body", INVALID_BODY_MESSAGE)
    out: dict[str, Any] = {}
    for rule in RESOURCE_RULES:
        message = rule.apply(payload, out, partial)
        if message is not None:
            return InvalidResource(rule.field, message)
    return ValidResource(out)


def _read_url(
    payload: Mapping[str, Any], key: str, invalid_message: str,
) -> tuple[str | None, str | None]:
    """Return (sanitized url or None, error). Empty string counts as absent."""
    value = payload.get(key)
    if value is None:
        return None, None
    if not isinstance(value, str):
        return None, invalid_message
    value = value.strip()
    if not value:
        return None, None
    if not HTTP_URL_PATTERN.match(value):
        return None, invalid_message
    cleaned = sanitize_url(value)
    if cleaned is None:
        return None, invalid_message
    return cleaned, None
