"""Token manager for issuing and verifying JWT bearer tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from app.configs import settings
from app.errors import InvalidTokenError, TokenExpiredError
from app.schemas.auth import TokenData


def create_access_token(
    user_id: UUID,
    email: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token carrying the user's identity.

    Args:
        user_id: User's UUID
        email: User's email
        role: User's role
        expires_delta: Optional expiration time delta, 7 days by default

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": "access",
    }

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """
    Decode and validate an access token.

    Args:
        token: JWT token string

    Returns:
        TokenData: Decoded token claims

    Raises:
        TokenExpiredError: If the token is past its expiry
        InvalidTokenError: If the signature, format or claims are invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError from e
    except JWTError as e:
        raise InvalidTokenError from e

    if payload.get("type") != "access":
        raise InvalidTokenError

    try:
        return TokenData(
            user_id=payload.get("sub"),
            email=payload.get("email"),
            role=payload.get("role"),
            jti=payload.get("jti"),
        )
    except PydanticValidationError as e:
        raise InvalidTokenError from e
