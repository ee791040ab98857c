"""Food log endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from macro_tracker.api.dependencies import current_user_id
from macro_tracker.api.models import CreateLogRequest, UpdateLogRequest
from macro_tracker.api.serializers import serialize_day, serialize_entry

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer

router = APIRouter(prefix="/api/log", tags=["log"])


@router.post("")
async def create_log_entry(
    body: CreateLogRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Parse a food description and log it."""
    container: AppContainer = request.app.state.container
    parsed = await container.parser_service.parse(body.input)
    logged_at = body.logged_at or datetime.now(tz=UTC).date()
    entry = container.ledger_service.log_food(user_id, parsed, logged_at)
    return serialize_entry(entry)


@router.get("/entries/{entry_id}")
async def get_log_entry(
    entry_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return a single log entry with its food."""
    container: AppContainer = request.app.state.container
    return serialize_entry(container.ledger_service.get_entry(entry_id, user_id))


@router.get("/{day}")
async def get_log_by_date(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the day's entries with totals."""
    container: AppContainer = request.app.state.container
    return serialize_day(container.ledger_service.get_day(user_id, day))


@router.patch("/{entry_id}")
async def update_log_entry(
    entry_id: UUID,
    body: UpdateLogRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Change the servings of an entry."""
    container: AppContainer = request.app.state.container
    entry = container.ledger_service.update_servings(entry_id, user_id, body.servings)
    return serialize_entry(entry)


@router.delete("/{entry_id}")
async def delete_log_entry(
    entry_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, bool]:
    """Delete an entry."""
    container: AppContainer = request.app.state.container
    container.ledger_service.delete_entry(entry_id, user_id)
    return {"success": True}
