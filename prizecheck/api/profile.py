"""
Profile API endpoints.

Reads and updates per-user preferences: display name, profile picture URL
and leaderboard visibility.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from prizecheck.db import get_preferences, is_display_name_available, update_preferences
from prizecheck.db.database import get_session
from prizecheck.models.db import UserPreferencesDB
from prizecheck.models.failure import DisplayNameTakenError

router = APIRouter(prefix="/profile", tags=["profile"])

MAX_DISPLAY_NAME_LENGTH = 100


class PreferencesResponse(BaseModel):
    """A user's profile preferences."""

    user_id: str
    display_name: str | None = None
    profile_picture_url: str | None = None
    show_on_leaderboard: bool = False


class AvailabilityResponse(BaseModel):
    """Whether a display name can be taken."""

    display_name: str
    available: bool
    message: str | None = None


class DisplayNameRequest(BaseModel):
    display_name: str = Field(..., max_length=MAX_DISPLAY_NAME_LENGTH)


class ProfilePictureRequest(BaseModel):
    profile_picture_url: str = Field(..., description="Public URL of the uploaded picture")


class LeaderboardVisibilityRequest(BaseModel):
    show_on_leaderboard: bool


class LeaderboardVisibilityResponse(PreferencesResponse):
    message: str


def _preferences_response(user_id: str, preferences: UserPreferencesDB | None) -> PreferencesResponse:
    if preferences is None:
        return PreferencesResponse(user_id=user_id)
    return PreferencesResponse(
        user_id=user_id,
        display_name=preferences.display_name,
        profile_picture_url=preferences.profile_picture_url,
        show_on_leaderboard=preferences.show_on_leaderboard,
    )


@router.get("/{user_id}", response_model=PreferencesResponse)
async def get_profile(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PreferencesResponse:
    """Get a user's preferences. Users who never saved any get the defaults."""
    return _preferences_response(user_id, await get_preferences(session, user_id))


@router.get("/{user_id}/display-name/check", response_model=AvailabilityResponse)
async def check_display_name(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    name: Annotated[str, Query(max_length=MAX_DISPLAY_NAME_LENGTH)] = "",
) -> AvailabilityResponse:
    """Check whether a display name is free (or already this user's)."""
    display_name = name.strip()
    if not display_name:
        return AvailabilityResponse(
            display_name=display_name, available=False, message="Display name is required"
        )

    available = await is_display_name_available(session, user_id, display_name)
    return AvailabilityResponse(
        display_name=display_name,
        available=available,
        message=None if available else "This display name is already taken",
    )


@router.put("/{user_id}/display-name", response_model=PreferencesResponse)
async def set_display_name(
    user_id: str,
    request: DisplayNameRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PreferencesResponse:
    """
    Set a user's display name.

    Returns 409 if another user already has it.
    """
    display_name = request.display_name.strip()
    if not display_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Display name is required",
        )

    if not await is_display_name_available(session, user_id, display_name):
        raise DisplayNameTakenError(display_name)

    try:
        preferences = await update_preferences(session, user_id, display_name=display_name)
    except IntegrityError as e:
        # Claimed by someone else between the check and the write
        raise DisplayNameTakenError(display_name) from e

    return _preferences_response(user_id, preferences)


@router.put("/{user_id}/picture", response_model=PreferencesResponse)
async def set_profile_picture(
    user_id: str,
    request: ProfilePictureRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PreferencesResponse:
    """Store the URL of a user's profile picture."""
    url = request.profile_picture_url.strip()
    if not url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Profile picture URL cannot be empty",
        )

    preferences = await update_preferences(session, user_id, profile_picture_url=url)
    return _preferences_response(user_id, preferences)


@router.put("/{user_id}/leaderboard", response_model=LeaderboardVisibilityResponse)
async def set_leaderboard_visibility(
    user_id: str,
    request: LeaderboardVisibilityRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> LeaderboardVisibilityResponse:
    """Opt in to or out of the leaderboard."""
    preferences = await update_preferences(
        session, user_id, show_on_leaderboard=request.show_on_leaderboard
    )
    base = _preferences_response(user_id, preferences)

    when = "now" if request.show_on_leaderboard else "no longer"
    return LeaderboardVisibilityResponse(
        **base.model_dump(),
        message=f"You will {when} appear on the leaderboard",
    )
