"""Authentication request and token schemas."""

from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, SecretStr

from app.configs.settings import MAX_NAME_LENGTH
from app.schemas.user import UserResponse


def _strip_lower(value: object) -> object:
    return value.strip().lower() if isinstance(value, str) else value


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


NormalizedEmail = Annotated[EmailStr, BeforeValidator(_strip_lower)]


class SignupRequest(BaseModel):
    """Signup payload."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    full_name: Annotated[str, BeforeValidator(_strip)] = Field(
        ...,
        alias="fullName",
        min_length=1,
        max_length=MAX_NAME_LENGTH,
        description="Full name",
        examples=["Alice Smith"],
    )
    email: NormalizedEmail = Field(
        ...,
        description="Email address",
        examples=["alice@example.com"],
    )
    password: SecretStr = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Password",
        examples=["Password123"],
    )
    profile_image_url: str | None = Field(
        default=None,
        alias="profileImageUrl",
        max_length=500,
        description="Profile image URL",
    )


class SigninRequest(BaseModel):
    """Signin payload."""

    model_config = ConfigDict(frozen=True)

    email: NormalizedEmail = Field(..., description="Email address", examples=["alice@example.com"])
    password: SecretStr = Field(..., min_length=1, description="Password")


class TokenData(BaseModel):
    """Claims extracted from a verified access token."""

    user_id: UUID
    email: str
    role: str
    jti: str


class SigninResponse(BaseModel):
    """Successful signin envelope."""

    success: bool = True
    message: str = "Login successful"
    token: str
    user: UserResponse
