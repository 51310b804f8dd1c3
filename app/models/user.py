"""User database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import MAX_NAME_LENGTH, MAX_URL_LENGTH
from app.utils.helpers import utc_now


class UserDB(SQLModel, table=True):
    """
    User database model.

    Accounts are created on signup and read on signin and token validation.
    The password hash never leaves this model: response schemas do not
    declare it.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    # Primary key
    uuid: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )

    full_name: str = Field(
        sa_column=Column(String(MAX_NAME_LENGTH), nullable=False),
        description="Full name",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique, lower-cased)",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Argon2 password hash",
    )
    profile_image_url: str | None = Field(
        default=None,
        sa_column=Column(String(MAX_URL_LENGTH)),
        description="Profile image URL",
    )

    # Role-based access control
    role: str = Field(
        default="USER",
        sa_column=Column(String(20), nullable=False, server_default="USER"),
        description="User role (USER, ADMIN)",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "uuid": "123e4567-e89b-12d3-a456-426614174000",
                "full_name": "Alice Smith",
                "email": "alice@example.com",
                "profile_image_url": None,
                "role": "USER",
            },
        },
    )
