"""Ownership-scoped session lifecycle logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from wellness_sessions.domain.errors import SessionNotFoundError
from wellness_sessions.domain.sessions import (
    PublicSession,
    SessionRecord,
    validate_session_fields,
)
from wellness_sessions.services.users import UserService

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "unknown"


class SessionRepository(Protocol):
    """Persistence interface for wellness sessions.

    Every owner-scoped method matches ``id`` and ``owner_id`` in a single
    predicate, so a session owned by someone else looks exactly like a
    missing one.
    """

    def create_session(
        self, owner_id: UUID, title: str, tags: list[str], content_url: str
    ) -> SessionRecord:
        """Create a draft session and return it."""

    def update_session(
        self, session_id: UUID, owner_id: UUID, fields: dict[str, object]
    ) -> SessionRecord | None:
        """Update an owned session, returning None when nothing matched."""

    def publish_session(self, session_id: UUID, owner_id: UUID) -> SessionRecord | None:
        """Mark an owned session as published, returning None when nothing matched."""

    def get_session(self, session_id: UUID, owner_id: UUID) -> SessionRecord | None:
        """Return an owned session, if present."""

    def list_by_owner(self, owner_id: UUID) -> list[SessionRecord]:
        """Return all sessions for an owner."""

    def list_published(self) -> list[SessionRecord]:
        """Return published sessions, newest created first."""

    def delete_session(self, session_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned session and report whether a row was removed."""


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag string, dropping blank pieces."""
    if not raw:
        return []
    return [piece.strip() for piece in raw.split(",") if piece.strip()]


@dataclass
class SessionService:
    """Application service for the draft -> published session lifecycle."""

    repository: SessionRepository
    user_service: UserService

    def save_draft(  # noqa: PLR0913
        self,
        owner_id: UUID,
        title: str,
        raw_tags: str | None,
        content_url: str,
        session_id: UUID | None = None,
    ) -> SessionRecord:
        """Create a new draft or update an owned session in place.

        Updating never touches ``status``: a published session stays published.
        """
        tags = parse_tags(raw_tags)
        title = title.strip()
        content_url = content_url.strip()
        validate_session_fields(title, tags, content_url)
        if session_id is None:
            session = self.repository.create_session(
                owner_id=owner_id, title=title, tags=tags, content_url=content_url
            )
            logger.info(
                "Created draft session", extra={"session_id": str(session.id)}
            )
            return session

        session = self.repository.update_session(
            session_id,
            owner_id,
            {"title": title, "tags": tags, "content_url": content_url},
        )
        if session is None:
            raise SessionNotFoundError(
                "Session not found or you do not have permission to edit it"
            )
        return session

    def publish(self, owner_id: UUID, session_id: UUID) -> SessionRecord:
        """Publish an owned session. Publishing twice is a no-op."""
        session = self.repository.publish_session(session_id, owner_id)
        if session is None:
            raise SessionNotFoundError(
                "Session not found or you do not have permission to publish it"
            )
        logger.info("Published session", extra={"session_id": str(session_id)})
        return session

    def delete(self, owner_id: UUID, session_id: UUID) -> None:
        """Permanently delete an owned session."""
        if not self.repository.delete_session(session_id, owner_id):
            raise SessionNotFoundError(
                "Session not found or you do not have permission to delete it"
            )

    def get_mine(self, owner_id: UUID, session_id: UUID) -> SessionRecord:
        """Return a single owned session."""
        session = self.repository.get_session(session_id, owner_id)
        if session is None:
            raise SessionNotFoundError("Session not found")
        return session

    def list_mine(self, owner_id: UUID) -> list[SessionRecord]:
        """Return the owner's drafts and published sessions, latest edit first."""
        sessions = self.repository.list_by_owner(owner_id)
        return sorted(sessions, key=lambda session: session.updated_at, reverse=True)

    def list_public(self) -> list[PublicSession]:
        """Return published sessions with author emails, newest first."""
        sessions = [
            session
            for session in self.repository.list_published()
            if session.status == "published"
        ]
        authors = self.user_service.author_emails(
            {session.owner_id for session in sessions}
        )
        public = [
            PublicSession(
                id=session.id,
                title=session.title,
                tags=list(session.tags),
                content_url=session.content_url,
                status=session.status,
                created_at=session.created_at,
                updated_at=session.updated_at,
                author=authors.get(session.owner_id, UNKNOWN_AUTHOR),
            )
            for session in sessions
        ]
        return sorted(public, key=lambda session: session.created_at, reverse=True)
