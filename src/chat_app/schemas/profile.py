# src/chat_app/schemas/profile.py
"""Profile-related Pydantic schemas."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("Value must not be blank")
    return v


class ChangeUsernameRequest(BaseModel):
    """Schema for renaming the current user."""

    username: Annotated[
        str,
        Field(min_length=1, max_length=32, description="New display name"),
        AfterValidator(_not_blank),
    ]


class ChangeStatusRequest(BaseModel):
    """Schema for updating the current user's custom status."""

    custom_status: Annotated[
        str,
        Field(min_length=1, max_length=128, description="Free-form status text"),
        AfterValidator(_not_blank),
    ]


class UserProfile(BaseModel):
    """Public projection of a user.

    Only these four fields ever leave the service; credential columns on the
    ORM model are dropped by ``from_attributes`` validation.
    """

    id: str
    username: str
    custom_status: str | None = None
    profile_picture: str | None = None

    model_config = ConfigDict(from_attributes=True)
