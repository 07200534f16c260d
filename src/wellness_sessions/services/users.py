"""User-related business logic."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from wellness_sessions.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for public user profiles."""

    def upsert_profile(self, user: UserRecord) -> None:
        """Create or refresh the profile row for a user."""

    def get_emails(self, user_ids: list[UUID]) -> dict[UUID, str]:
        """Return the public email for each known user id."""


@dataclass
class UserService:
    """Application service for author identities."""

    repository: UserRepository

    def ensure_user(self, user: UserRecord) -> UserRecord:
        """Make sure the caller has a profile row and return the caller."""
        self.repository.upsert_profile(user)
        return user

    def author_emails(self, user_ids: Iterable[UUID]) -> dict[UUID, str]:
        """Resolve author emails for a set of owners."""
        unique_ids = sorted(set(user_ids), key=str)
        if not unique_ids:
            return {}
        return self.repository.get_emails(unique_ids)
