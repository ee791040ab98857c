"""Food library endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from macro_tracker.api.dependencies import current_user_id
from macro_tracker.api.models import UpdateFoodRequest
from macro_tracker.api.serializers import serialize_food

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer

router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("")
async def list_foods(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> list[dict[str, object]]:
    """Return the user's library, most used first."""
    container: AppContainer = request.app.state.container
    foods = container.ledger_service.list_foods(user_id)
    return [serialize_food(food) for food in foods]


@router.patch("/{food_id}")
async def update_food(
    food_id: UUID,
    body: UpdateFoodRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Edit a library food's name, unit or macros."""
    container: AppContainer = request.app.state.container
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    food = container.ledger_service.update_food(food_id, user_id, changes)
    return serialize_food(food)


@router.delete("/{food_id}")
async def delete_food(
    food_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, bool]:
    """Delete a food along with its log entries."""
    container: AppContainer = request.app.state.container
    container.ledger_service.delete_food(food_id, user_id)
    return {"success": True}
