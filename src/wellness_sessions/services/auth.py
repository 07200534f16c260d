"""Caller authentication seam."""

from typing import Protocol

from wellness_sessions.domain.models import UserRecord


class AuthVerifier(Protocol):
    """Resolves bearer tokens into caller identities."""

    def verify(self, token: str) -> UserRecord | None:
        """Return the caller for a token, or None when the token is invalid."""


def parse_bearer_token(header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header value."""
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None
