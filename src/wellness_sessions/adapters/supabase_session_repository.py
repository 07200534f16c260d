"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from wellness_sessions.adapters.supabase_support import execute_query, parse_timestamp
from wellness_sessions.domain.errors import StoreUnavailableError
from wellness_sessions.domain.sessions import (
    SessionRecord,
    SessionStatus,
    validate_session_fields,
)
from wellness_sessions.services.sessions import SessionRepository

_COLUMNS = "id, owner_id, title, tags, content_url, status, created_at, updated_at"
_WRITABLE_FIELDS = {"title", "tags", "content_url"}


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for wellness sessions."""

    client: Client
    table_name: str = "sessions"

    def create_session(
        self, owner_id: UUID, title: str, tags: list[str], content_url: str
    ) -> SessionRecord:
        """Create a draft session row and return it."""
        validate_session_fields(title, tags, content_url)
        now = datetime.now(tz=UTC).isoformat()
        response = execute_query(
            self.client.table(self.table_name).insert(
                {
                    "owner_id": str(owner_id),
                    "title": title,
                    "tags": tags,
                    "content_url": content_url,
                    "status": SessionStatus.DRAFT.value,
                    "created_at": now,
                    "updated_at": now,
                }
            ),
            "create session",
        )
        if not response.data:
            raise StoreUnavailableError("Failed to create session")
        return _parse_session(response.data[0])

    def update_session(
        self, session_id: UUID, owner_id: UUID, fields: dict[str, object]
    ) -> SessionRecord | None:
        """Update title, tags or content URL of an owned session."""
        unknown = set(fields) - _WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
        validate_session_fields(
            str(fields.get("title", "")),
            list(fields.get("tags", [])),
            str(fields.get("content_url", "")),
        )
        payload = {
            **fields,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        response = execute_query(
            self.client.table(self.table_name)
            .update(payload)
            .eq("id", str(session_id))
            .eq("owner_id", str(owner_id)),
            "update session",
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def publish_session(self, session_id: UUID, owner_id: UUID) -> SessionRecord | None:
        """Set an owned session's status to published."""
        response = execute_query(
            self.client.table(self.table_name)
            .update(
                {
                    "status": SessionStatus.PUBLISHED.value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(session_id))
            .eq("owner_id", str(owner_id)),
            "publish session",
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def get_session(self, session_id: UUID, owner_id: UUID) -> SessionRecord | None:
        """Return an owned session by id, if present."""
        response = execute_query(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .eq("owner_id", str(owner_id))
            .limit(1),
            "fetch session",
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def list_by_owner(self, owner_id: UUID) -> list[SessionRecord]:
        """Return an owner's sessions, most recently updated first."""
        response = execute_query(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("owner_id", str(owner_id))
            .order("updated_at", desc=True),
            "list sessions",
        )
        return [_parse_session(row) for row in response.data or []]

    def list_published(self) -> list[SessionRecord]:
        """Return published sessions, newest created first."""
        response = execute_query(
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("status", SessionStatus.PUBLISHED.value)
            .order("created_at", desc=True),
            "list published sessions",
        )
        return [_parse_session(row) for row in response.data or []]

    def delete_session(self, session_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned session row."""
        response = execute_query(
            self.client.table(self.table_name)
            .delete()
            .eq("id", str(session_id))
            .eq("owner_id", str(owner_id)),
            "delete session",
        )
        return bool(response.data)


def _parse_session(row: dict[str, object]) -> SessionRecord:
    """Parse a session row into a domain model."""
    return SessionRecord(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["owner_id"])),
        title=str(row.get("title", "")),
        tags=[str(tag) for tag in row.get("tags") or []],
        content_url=str(row.get("content_url", "")),
        status=SessionStatus(row.get("status", SessionStatus.DRAFT.value)),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
