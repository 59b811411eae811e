"""Profile endpoints for the chat API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from chat_app.api.dependencies import (
    CurrentUserIdDep,
    ProfileServiceDep,
    RawBodyDep,
    ValidatorDep,
    get_current_user_id,
)
from chat_app.api.responses import success
from chat_app.schemas.profile import ChangeStatusRequest, ChangeUsernameRequest

router = APIRouter(tags=["profiles"])


@router.post("/change_username")
def change_username(
    body: RawBodyDep,
    validator: ValidatorDep,
    current_user_id: CurrentUserIdDep,
    service: ProfileServiceDep,
) -> dict[str, Any]:
    """Rename the authenticated user."""
    payload = validator.parse(ChangeUsernameRequest, body)
    service.change_username(current_user_id, payload.username)
    return success("Username changed successfully")


@router.post("/change_custom_status")
def change_custom_status(
    body: RawBodyDep,
    validator: ValidatorDep,
    current_user_id: CurrentUserIdDep,
    service: ProfileServiceDep,
) -> dict[str, Any]:
    """Update the authenticated user's custom status."""
    payload = validator.parse(ChangeStatusRequest, body)
    service.change_status(current_user_id, payload.custom_status)
    return success("Status changed successfully")


@router.get("/user_profile/{user_id}", dependencies=[Depends(get_current_user_id)])
def get_user_profile(
    user_id: str,
    service: ProfileServiceDep,
) -> dict[str, Any]:
    """Return the public profile of any user."""
    return success(user_profile=service.get_profile(user_id))


@router.get("/user_profile")
def get_own_profile(
    current_user_id: CurrentUserIdDep,
    service: ProfileServiceDep,
) -> dict[str, Any]:
    """Return the authenticated user's own profile."""
    return success(user_profile=service.get_profile(current_user_id))


@router.get("/get_online_users", dependencies=[Depends(get_current_user_id)])
def get_online_users(
    service: ProfileServiceDep,
) -> dict[str, Any]:
    """List users whose presence status is online."""
    return success(online_users=service.list_online_users())
