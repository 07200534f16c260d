"""Plain-text list views for public and owned sessions."""

import logging
from dataclasses import dataclass, field

import httpx

from wellness_sessions.api.session_models import PublicSessionOut, SessionOut
from wellness_sessions.client.api_client import ApiError, SessionsClient
from wellness_sessions.client.notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


@dataclass
class PublicSessionsView:
    """Lists published sessions for any visitor."""

    client: SessionsClient
    notifier: Notifier = field(default_factory=LoggingNotifier)
    sessions: list[PublicSessionOut] = field(default_factory=list)

    async def refresh(self) -> list[PublicSessionOut]:
        """Reload published sessions from the API."""
        try:
            self.sessions = await self.client.list_public()
        except (ApiError, httpx.HTTPError):
            logger.warning("Failed to fetch sessions", exc_info=True)
            self.notifier.error("Failed to fetch sessions")
        return self.sessions

    def render(self) -> str:
        if not self.sessions:
            return "No published sessions yet."
        lines = ["Published sessions:"]
        for session in self.sessions:
            lines.append(
                f"- {session.title} by {session.author}"
                f" ({session.created_at.date()}){_format_tags(session.tags)}"
            )
        return "\n".join(lines)


@dataclass
class MySessionsView:
    """Lists the caller's sessions and offers publish and delete actions."""

    client: SessionsClient
    notifier: Notifier = field(default_factory=LoggingNotifier)
    sessions: list[SessionOut] = field(default_factory=list)

    async def refresh(self) -> list[SessionOut]:
        """Reload the caller's sessions from the API."""
        try:
            self.sessions = await self.client.list_mine()
        except (ApiError, httpx.HTTPError):
            logger.warning("Failed to fetch own sessions", exc_info=True)
            self.notifier.error("Failed to fetch your sessions")
        return self.sessions

    async def publish(self, session_id: str) -> bool:
        """Publish a session and mark it published in the local list."""
        try:
            await self.client.publish(session_id)
        except (ApiError, httpx.HTTPError):
            logger.warning("Failed to publish session", exc_info=True)
            self.notifier.error("Failed to publish session")
            return False
        self.sessions = [
            _with_status(session, "published") if session.id == session_id else session
            for session in self.sessions
        ]
        self.notifier.success("Session published successfully")
        return True

    async def delete(self, session_id: str) -> bool:
        """Delete a session and drop it from the local list."""
        try:
            await self.client.delete(session_id)
        except (ApiError, httpx.HTTPError):
            logger.warning("Failed to delete session", exc_info=True)
            self.notifier.error("Failed to delete session")
            return False
        self.sessions = [
            session for session in self.sessions if session.id != session_id
        ]
        self.notifier.success("Session deleted successfully")
        return True

    def render(self) -> str:
        if not self.sessions:
            return "You have no sessions yet. Create one to get started."
        lines = ["My sessions:"]
        for session in self.sessions:
            lines.append(
                f"- [{session.status}] {session.title}"
                f" (updated {session.updated_at.date()}){_format_tags(session.tags)}"
            )
        return "\n".join(lines)


def _with_status(session: SessionOut, status: str) -> SessionOut:
    return session.model_copy(update={"status": status})


def _format_tags(tags: list[str]) -> str:
    if not tags:
        return ""
    return " #" + " #".join(tags)
