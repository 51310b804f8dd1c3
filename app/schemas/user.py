"""
Public user representations.

None of these schemas declare the password hash, so it can never be
serialized into a response.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Public user fields returned by signup, signin and profile."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    uuid: UUID = Field(..., alias="id", description="User ID")
    full_name: str = Field(..., alias="fullName", description="Full name")
    email: str = Field(..., description="Email address")
    profile_image_url: str | None = Field(
        default=None,
        alias="profileImageUrl",
        description="Profile image URL",
    )
    role: str = Field(default="USER", description="User role")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")


class AuthorResponse(BaseModel):
    """Author identity embedded in a blog."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    uuid: UUID = Field(..., alias="id")
    full_name: str = Field(..., alias="fullName")
    email: str
    profile_image_url: str | None = Field(default=None, alias="profileImageUrl")


class CommenterResponse(BaseModel):
    """Commenting user's identity embedded in a comment."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    uuid: UUID = Field(..., alias="id")
    full_name: str = Field(..., alias="fullName")
    profile_image_url: str | None = Field(default=None, alias="profileImageUrl")


class UserEnvelope(BaseModel):
    """``{success, message?, user}`` envelope."""

    success: bool = True
    message: str | None = None
    user: UserResponse
