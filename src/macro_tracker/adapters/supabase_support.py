"""Shared helpers for Supabase-backed repositories."""

import logging
from datetime import date, datetime

import httpx
from postgrest import APIError

from macro_tracker.errors import PersistenceError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def execute(  # type: ignore[no-untyped-def]
    query, action: str, conflict_ok: bool = False
):
    """Run a PostgREST query, translating client failures to PersistenceError.

    With ``conflict_ok`` a unique-constraint violation returns None instead.
    """
    try:
        return query.execute()
    except APIError as exc:
        if conflict_ok and exc.code == UNIQUE_VIOLATION:
            logger.info("Supabase unique conflict", extra={"action": action})
            return None
        logger.exception("Supabase request failed", extra={"action": action})
        raise PersistenceError(f"Failed to {action}") from exc
    except httpx.HTTPError as exc:
        logger.exception("Supabase request failed", extra={"action": action})
        raise PersistenceError(f"Failed to {action}") from exc


def name_key(name: str) -> str:
    """Return the normalized form stored in the ``name_key`` column."""
    return name.lower()


def parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_date(raw: object) -> date:
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw)[:10])


def optional_float(raw: object) -> float | None:
    return float(raw) if raw is not None else None
