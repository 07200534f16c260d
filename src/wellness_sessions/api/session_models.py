"""Pydantic models for the sessions HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wellness_sessions.domain.sessions import PublicSession, SessionRecord


class SaveDraftRequest(BaseModel):
    """Body of ``POST /sessions/draft``; tags arrive comma-separated."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    tags: str | None = None
    content_url: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")


class PublishRequest(BaseModel):
    """Body of ``POST /sessions/publish``."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")


class SessionOut(BaseModel):
    """Session shape returned to its owner."""

    id: str
    title: str
    tags: list[str]
    content_url: str
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, session: SessionRecord) -> "SessionOut":
        return cls(
            id=str(session.id),
            title=session.title,
            tags=list(session.tags),
            content_url=session.content_url,
            status=session.status.value,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )


class PublicSessionOut(SessionOut):
    """Published session shape with the author's email and no owner id."""

    author: str

    @classmethod
    def from_public(cls, session: PublicSession) -> "PublicSessionOut":
        return cls(
            id=str(session.id),
            title=session.title,
            tags=list(session.tags),
            content_url=session.content_url,
            status=session.status.value,
            created_at=session.created_at,
            updated_at=session.updated_at,
            author=session.author,
        )


class SessionListResponse(BaseModel):
    sessions: list[SessionOut]


class PublicSessionListResponse(BaseModel):
    sessions: list[PublicSessionOut]


class SessionResponse(BaseModel):
    session: SessionOut
    message: str | None = None


class MessageResponse(BaseModel):
    message: str
