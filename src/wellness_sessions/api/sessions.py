"""Session endpoints with bearer-token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from wellness_sessions.api.session_models import (
    MessageResponse,
    PublicSessionListResponse,
    PublicSessionOut,
    PublishRequest,
    SaveDraftRequest,
    SessionListResponse,
    SessionOut,
    SessionResponse,
)
from wellness_sessions.domain.errors import (
    SessionNotFoundError,
    SessionValidationError,
)
from wellness_sessions.domain.models import UserRecord  # noqa: TC001
from wellness_sessions.services.auth import parse_bearer_token

if TYPE_CHECKING:
    from wellness_sessions.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_caller(
    request: Request,
    authorization: str | None = Header(default=None),
) -> UserRecord:
    """Resolve the bearer token into the calling user."""
    token = parse_bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    container = _container(request)
    user = container.auth_verifier.verify(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )
    return container.user_service.ensure_user(user)


def _session_id(raw: str | None) -> UUID:
    """Parse a session id; malformed ids are reported as not found."""
    try:
        return UUID(str(raw))
    except ValueError as exc:
        raise SessionNotFoundError("Session not found") from exc


@router.get("", response_model=PublicSessionListResponse)
async def list_public_sessions(request: Request) -> PublicSessionListResponse:
    """Return published sessions with their authors, newest first."""
    sessions = _container(request).session_service.list_public()
    return PublicSessionListResponse(
        sessions=[PublicSessionOut.from_public(session) for session in sessions]
    )


@router.get("/mine", response_model=SessionListResponse)
async def list_my_sessions(
    request: Request, caller: UserRecord = Depends(require_caller)
) -> SessionListResponse:
    """Return the caller's drafts and published sessions."""
    sessions = _container(request).session_service.list_mine(caller.id)
    return SessionListResponse(
        sessions=[SessionOut.from_record(session) for session in sessions]
    )


@router.get(
    "/mine/{session_id}",
    response_model=SessionResponse,
    response_model_exclude_none=True,
)
async def get_my_session(
    session_id: str,
    request: Request,
    caller: UserRecord = Depends(require_caller),
) -> SessionResponse:
    """Return a single session owned by the caller."""
    session = _container(request).session_service.get_mine(
        caller.id, _session_id(session_id)
    )
    return SessionResponse(session=SessionOut.from_record(session))


@router.post("/draft", response_model=SessionResponse)
async def save_draft(
    body: SaveDraftRequest,
    request: Request,
    caller: UserRecord = Depends(require_caller),
) -> SessionResponse:
    """Create a draft, or update an owned session when ``sessionId`` is given."""
    if not (body.title or "").strip() or not (body.content_url or "").strip():
        raise SessionValidationError("Title and content URL are required")
    session = _container(request).session_service.save_draft(
        owner_id=caller.id,
        title=body.title or "",
        raw_tags=body.tags,
        content_url=body.content_url or "",
        session_id=_session_id(body.session_id) if body.session_id else None,
    )
    return SessionResponse(
        message="Draft saved successfully", session=SessionOut.from_record(session)
    )


@router.post("/publish", response_model=SessionResponse)
async def publish_session(
    body: PublishRequest,
    request: Request,
    caller: UserRecord = Depends(require_caller),
) -> SessionResponse:
    """Publish a session owned by the caller."""
    if not body.session_id:
        raise SessionValidationError("Session ID is required")
    session = _container(request).session_service.publish(
        caller.id, _session_id(body.session_id)
    )
    return SessionResponse(
        message="Session published successfully",
        session=SessionOut.from_record(session),
    )


@router.delete("/mine/{session_id}", response_model=MessageResponse)
async def delete_session(
    session_id: str,
    request: Request,
    caller: UserRecord = Depends(require_caller),
) -> MessageResponse:
    """Permanently delete a session owned by the caller."""
    _container(request).session_service.delete(caller.id, _session_id(session_id))
    return MessageResponse(message="Session deleted successfully")
