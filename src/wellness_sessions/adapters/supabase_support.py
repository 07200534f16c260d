"""Shared helpers for Supabase-backed adapters."""

import logging
from datetime import datetime
from typing import Any

import httpx
from postgrest import APIError

from wellness_sessions.domain.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def execute_query(query: Any, action: str) -> Any:
    """Run a PostgREST query, translating transport failures."""
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        logger.exception("Supabase request failed", extra={"action": action})
        raise StoreUnavailableError(f"Failed to {action}") from exc


def parse_timestamp(raw: object) -> datetime:
    """Parse a PostgREST timestamp column."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    raise StoreUnavailableError(f"Unexpected timestamp value: {raw!r}")
