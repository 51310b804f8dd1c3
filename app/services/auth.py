"""Authentication service handling signup, signin and token verification."""

from app.errors.auth import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from app.errors.database import DuplicateEntryError
from app.managers.password_manager import hash_password, verify_and_update_password
from app.managers.token_manager import create_access_token, decode_access_token
from app.models import UserDB
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.auth import SigninRequest, SignupRequest

logger = get_logger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def signup(self, payload: SignupRequest) -> UserDB:
        """
        Register a new user.

        Args:
            payload: Validated signup request

        Returns:
            UserDB: The created user

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        if await self.user_repo.get_by_email(payload.email):
            raise DuplicateEmailError

        password_hash = await hash_password(payload.password.get_secret_value())
        try:
            user = await self.user_repo.create(
                full_name=payload.full_name,
                email=payload.email,
                password_hash=password_hash,
                profile_image_url=payload.profile_image_url,
            )
        except DuplicateEntryError as e:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateEmailError from e

        logger.info(f"User {user.uuid} signed up")
        return user

    async def authenticate_user(self, email: str, password: str) -> UserDB:
        """
        Authenticate a user by email and password.

        Unknown emails still pay for one hash verification, so the response
        time does not reveal whether an account exists.

        Args:
            email: Normalized email address
            password: Plaintext password

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        user = await self.user_repo.get_by_email(email)
        is_valid, new_hash = await verify_and_update_password(
            password,
            user.password_hash if user else None,
        )
        if not user or not is_valid:
            raise InvalidCredentialsError

        if new_hash:
            await self.user_repo.update_password_hash(user, new_hash)
        return user

    async def signin(self, payload: SigninRequest) -> tuple[str, UserDB]:
        """
        Authenticate and issue an access token.

        Args:
            payload: Validated signin request

        Returns:
            tuple[str, UserDB]: The signed token and the user
        """
        user = await self.authenticate_user(payload.email, payload.password.get_secret_value())
        token = create_access_token(user_id=user.uuid, email=user.email, role=user.role)
        logger.info(f"User {user.uuid} signed in")
        return token, user

    async def verify_token(self, token: str) -> UserDB:
        """
        Resolve a bearer token to its user.

        Args:
            token: Encoded access token

        Returns:
            UserDB: The user the token was issued to

        Raises:
            InvalidTokenError: If the token is malformed or tampered with
            TokenExpiredError: If the token is past its expiry
            UserNotFoundError: If the user no longer exists
        """
        token_data = decode_access_token(token)
        user = await self.user_repo.get_by_id(token_data.user_id)
        if not user:
            raise UserNotFoundError
        return user

    @staticmethod
    def require_role(user: UserDB, role: str) -> UserDB:
        """Return the user if they hold ``role``, otherwise raise ForbiddenError."""
        if user.role != role:
            raise ForbiddenError(f"Access denied. {role} role required.")
        return user
