"""User repository for database operations."""

from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement

from app.errors.database import DatabaseError, DuplicateEntryError
from app.models.user import UserDB
from app.utils.helpers import utc_now


class UserRepository:
    """
    Repository for User database operations.

    Passwords arrive already hashed; this class never sees plaintext.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(
        self,
        full_name: str,
        email: str,
        password_hash: str,
        profile_image_url: str | None = None,
        role: str = "USER",
    ) -> UserDB:
        """
        Create a new user in the database.

        Args:
            full_name: Display name
            email: Normalized email address
            password_hash: Argon2 hash of the password
            profile_image_url: Optional profile image URL
            role: USER or ADMIN

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the email already exists
            DatabaseError: For other integrity errors
        """
        db_user = UserDB(
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            profile_image_url=profile_image_url,
            role=role,
        )

        try:
            self.session.add(db_user)
            await self.session.flush()
            await self.session.refresh(db_user)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "email" in error_msg.lower() or "unique" in error_msg.lower():
                raise DuplicateEntryError(detail=f"Email '{email}' already exists") from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        return db_user

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.uuid == user_id)),
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Normalized email address

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.email == email)),
        )
        return result.scalar_one_or_none()

    async def update_password_hash(self, user: UserDB, password_hash: str) -> UserDB:
        """Replace a user's password hash, used when the hash is upgraded on signin."""
        user.password_hash = password_hash
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.flush()
        return user
