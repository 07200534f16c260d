"""Domain models for the wellness sessions app."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents an authenticated caller."""

    id: UUID
    email: str
