"""Session editor with debounced draft auto-save.

Every edit cancels the pending timer and starts a new one. When the timer
expires without further edits, the full form is saved as a draft. Explicit
saves skip the timer. Saves already sent to the server are never cancelled.
Once a draft exists, a manual save may race an auto-save; both carry the
full snapshot and the server keeps whichever arrives last.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import StrEnum

import httpx

from wellness_sessions.api.session_models import SessionOut
from wellness_sessions.client.api_client import ApiError, SessionsClient
from wellness_sessions.client.notifications import LoggingNotifier, Notifier
from wellness_sessions.config import Settings

logger = logging.getLogger(__name__)

AUTOSAVE_DELAY_SECONDS = 5.0
FORM_FIELDS = frozenset({"title", "tags", "content_url"})


class EditorState(StrEnum):
    """Visible state of the editor."""

    IDLE = "idle"
    EDITING = "editing"
    SAVING = "saving"
    SAVED = "saved"


@dataclass(frozen=True)
class SessionForm:
    """Snapshot of the editor's form fields."""

    title: str = ""
    tags: str = ""
    content_url: str = ""

    def is_savable(self) -> bool:
        """Return true when the required fields are filled in."""
        return bool(self.title.strip() and self.content_url.strip())


@dataclass
class SessionEditor:
    """Stateful editor for creating and publishing one session."""

    client: SessionsClient
    notifier: Notifier = field(default_factory=LoggingNotifier)
    autosave_delay: float = AUTOSAVE_DELAY_SECONDS
    form: SessionForm = field(default_factory=SessionForm)
    session_id: str | None = None
    status: str | None = None
    state: EditorState = EditorState.IDLE
    last_saved_at: datetime | None = None
    _timer: asyncio.Task | None = field(default=None, init=False, repr=False)
    _saves: set[asyncio.Task] = field(default_factory=set, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_settings(
        cls,
        client: SessionsClient,
        settings: Settings,
        notifier: Notifier | None = None,
    ) -> "SessionEditor":
        """Create an editor using the configured auto-save delay."""
        return cls(
            client=client,
            notifier=notifier or LoggingNotifier(),
            autosave_delay=settings.autosave_delay_seconds,
        )

    @property
    def can_publish(self) -> bool:
        """Publishing is only possible once the server assigned an id."""
        return self.session_id is not None

    @property
    def autosave_pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def load(self, session_id: str) -> SessionOut | None:
        """Fill the form from an existing session."""
        try:
            session = await self.client.get_mine(session_id)
        except (ApiError, httpx.HTTPError):
            logger.warning("Failed to load session", exc_info=True)
            self.notifier.error("Failed to load session")
            return None
        self.form = SessionForm(
            title=session.title,
            tags=", ".join(session.tags),
            content_url=session.content_url,
        )
        self.session_id = session.id
        self.status = session.status
        self.state = EditorState.IDLE
        return session

    def edit(self, field_name: str, value: str) -> None:
        """Apply a keystroke and restart the inactivity timer.

        Must be called from inside a running event loop.
        """
        if self._closed:
            raise RuntimeError("Editor is closed")
        if field_name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {field_name}")
        self.form = replace(self.form, **{field_name: value})
        self.state = EditorState.EDITING
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(
            self._autosave_after_delay()
        )

    async def save_draft(self) -> SessionOut | None:
        """Save the current form immediately.

        Before the first draft exists, waits for an in-flight auto-save so
        both saves target the same session.
        """
        self._cancel_timer()
        if self.session_id is None:
            await self.wait_for_saves()
        return await self._save(self.form, automatic=False)

    async def publish(self) -> SessionOut | None:
        """Publish the saved draft."""
        if self.session_id is None:
            self.notifier.error("Please save as draft first")
            return None
        try:
            session = await self.client.publish(self.session_id)
        except (ApiError, httpx.HTTPError):
            logger.warning("Failed to publish session", exc_info=True)
            self.notifier.error("Failed to publish session")
            return None
        self.status = session.status
        self.notifier.success("Session published successfully!")
        return session

    async def wait_for_saves(self) -> None:
        """Wait until all in-flight saves have finished."""
        while self._saves:
            await asyncio.gather(*self._saves)

    def close(self) -> None:
        """Cancel the pending auto-save; in-flight saves run to completion."""
        self._closed = True
        self._cancel_timer()

    async def __aenter__(self) -> "SessionEditor":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _autosave_after_delay(self) -> None:
        await asyncio.sleep(self.autosave_delay)
        self._timer = None
        task = asyncio.get_running_loop().create_task(
            self._save(self.form, automatic=True)
        )
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)

    async def _save(self, snapshot: SessionForm, automatic: bool) -> SessionOut | None:
        if not snapshot.is_savable():
            return None
        self.state = EditorState.SAVING
        try:
            session = await self.client.save_draft(
                title=snapshot.title,
                tags=snapshot.tags,
                content_url=snapshot.content_url,
                session_id=self.session_id,
            )
        except (ApiError, httpx.HTTPError):
            logger.warning("Failed to save draft", exc_info=True)
            return self._save_failed()
        except Exception:
            logger.exception("Unexpected error while saving draft")
            return self._save_failed()
        if self.session_id is None:
            self.session_id = session.id
        self.status = session.status
        self.last_saved_at = datetime.now(tz=UTC)
        self.state = EditorState.EDITING if self.autosave_pending else EditorState.SAVED
        self.notifier.success(
            "Draft saved automatically" if automatic else "Draft saved"
        )
        return session

    def _save_failed(self) -> None:
        self.notifier.error("Failed to save draft")
        self.state = EditorState.EDITING
