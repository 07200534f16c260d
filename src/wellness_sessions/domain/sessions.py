"""Domain models for wellness sessions."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from wellness_sessions.domain.errors import SessionValidationError

MAX_TITLE_LENGTH = 100
MAX_TAGS = 10


class SessionStatus(StrEnum):
    """Lifecycle status of a session."""

    DRAFT = "draft"
    PUBLISHED = "published"


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted wellness session."""

    id: UUID
    owner_id: UUID
    title: str
    tags: list[str]
    content_url: str
    status: SessionStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PublicSession:
    """Published session joined with its author's public identity."""

    id: UUID
    title: str
    tags: list[str]
    content_url: str
    status: SessionStatus
    created_at: datetime
    updated_at: datetime
    author: str


def validate_session_fields(title: str, tags: list[str], content_url: str) -> None:
    """Check the constraints enforced on every session write."""
    if not title or not title.strip():
        raise SessionValidationError("Title is required")
    if len(title.strip()) > MAX_TITLE_LENGTH:
        raise SessionValidationError(
            f"Title cannot be more than {MAX_TITLE_LENGTH} characters"
        )
    if len(tags) > MAX_TAGS:
        raise SessionValidationError(f"Cannot have more than {MAX_TAGS} tags")
    if any(not tag or tag != tag.strip() for tag in tags):
        raise SessionValidationError("Tags must be trimmed and non-empty")
    if not content_url or not content_url.strip():
        raise SessionValidationError("Content URL is required")
