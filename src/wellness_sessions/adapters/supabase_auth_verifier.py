"""Supabase Auth token verification."""

import logging
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import Client
from supabase_auth.errors import AuthApiError, AuthRetryableError

from wellness_sessions.domain.errors import StoreUnavailableError
from wellness_sessions.domain.models import UserRecord
from wellness_sessions.services.auth import AuthVerifier

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthVerifier(AuthVerifier):
    """Resolves access tokens issued by Supabase Auth."""

    client: Client

    def verify(self, token: str) -> UserRecord | None:
        """Return the user behind an access token, if it is valid.

        Raises StoreUnavailableError when the auth service cannot be reached.
        """
        try:
            response = self.client.auth.get_user(token)
        except (AuthRetryableError, httpx.HTTPError) as exc:
            logger.exception("Supabase auth request failed")
            raise StoreUnavailableError("Failed to verify access token") from exc
        except AuthApiError:
            logger.warning("Rejected access token", exc_info=True)
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return UserRecord(id=UUID(str(user.id)), email=user.email or "")
