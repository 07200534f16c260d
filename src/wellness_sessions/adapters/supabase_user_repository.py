"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from wellness_sessions.adapters.supabase_support import execute_query
from wellness_sessions.domain.models import UserRecord
from wellness_sessions.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for public user profiles."""

    client: Client
    table_name: str = "profiles"

    def upsert_profile(self, user: UserRecord) -> None:
        """Create or refresh the caller's profile row."""
        execute_query(
            self.client.table(self.table_name).upsert(
                {
                    "id": str(user.id),
                    "email": user.email,
                    "last_active_at": datetime.now(tz=UTC).isoformat(),
                }
            ),
            "save profile",
        )

    def get_emails(self, user_ids: list[UUID]) -> dict[UUID, str]:
        """Return emails for the given profile ids."""
        response = execute_query(
            self.client.table(self.table_name)
            .select("id, email")
            .in_("id", [str(user_id) for user_id in user_ids]),
            "fetch profiles",
        )
        return {
            UUID(str(row["id"])): str(row["email"])
            for row in response.data or []
            if row.get("email")
        }
