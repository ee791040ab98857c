"""Profile and tracking endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from macro_tracker.api.dependencies import current_user_id
from macro_tracker.api.models import TargetsPreviewRequest, UpdateProfileRequest
from macro_tracker.api.serializers import (
    serialize_profile,
    serialize_summary,
    serialize_totals,
)

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/profile")
async def get_profile(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | None:
    """Return the profile, or null before onboarding."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    return serialize_profile(profile) if profile else None


@router.put("/profile")
async def update_profile(
    body: UpdateProfileRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Update the profile and recalculate targets when possible."""
    container: AppContainer = request.app.state.container
    changes = body.model_dump(mode="json", exclude_unset=True)
    profile = container.profile_service.update_profile(user_id, changes)
    return serialize_profile(profile)


@router.post("/profile/targets/preview")
async def preview_targets(
    body: TargetsPreviewRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the targets the profile would get, without saving."""
    container: AppContainer = request.app.state.container
    targets = container.profile_service.preview_targets(body.model_dump(mode="json"))
    return serialize_totals(targets)


@router.get("/tracking/summary")
async def tracking_summary(
    start_date: date,
    end_date: date,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return averages over the logged days in a date range."""
    container: AppContainer = request.app.state.container
    summary = container.stats_service.get_range(user_id, start_date, end_date)
    return serialize_summary(summary)
