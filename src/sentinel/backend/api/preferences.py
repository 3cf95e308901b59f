# sentinel/backend/api/preferences.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from sentinel.backend.api.deps import get_preferences_service
from sentinel.backend.api.schemas import PreferencesResponse, PreferencesUpdateRequest
from sentinel.backend.core.preferences.service import PreferencesService
from sentinel.backend.core.preferences.user_preferences import DEFAULT_USER_ID

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    user_id: str = DEFAULT_USER_ID,
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesResponse:
    return PreferencesResponse.from_preferences(await service.get_preferences(user_id))


@router.patch("", response_model=PreferencesResponse)
async def update_preferences(
    req: PreferencesUpdateRequest,
    user_id: str = DEFAULT_USER_ID,
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesResponse:
    # Only fields present in the body are applied; an explicit null clears
    # the nullable ones (window position, last project path).
    preferences = await service.update_preferences(user_id, req.model_dump(exclude_unset=True))
    return PreferencesResponse.from_preferences(preferences)
