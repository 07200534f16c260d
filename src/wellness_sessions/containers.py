"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from wellness_sessions.adapters.supabase_auth_verifier import SupabaseAuthVerifier
from wellness_sessions.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from wellness_sessions.adapters.supabase_user_repository import SupabaseUserRepository
from wellness_sessions.config import Settings
from wellness_sessions.services.auth import AuthVerifier
from wellness_sessions.services.sessions import SessionService
from wellness_sessions.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_verifier: AuthVerifier
    user_service: UserService
    session_service: SessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(
        supabase_client, table_name=resolved_settings.profiles_table
    )
    session_repository = SupabaseSessionRepository(
        supabase_client, table_name=resolved_settings.sessions_table
    )
    user_service = UserService(user_repository)
    session_service = SessionService(
        repository=session_repository, user_service=user_service
    )
    auth_verifier = SupabaseAuthVerifier(supabase_client)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        auth_verifier=auth_verifier,
        user_service=user_service,
        session_service=session_service,
        close_resources=close_resources,
    )
