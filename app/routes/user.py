# app/routes/user.py

"""
User Routes.

Account endpoints: signup, signin and the authenticated profile.

Summary
-------
Endpoints include:
  - Sign up
  - Sign in
  - Get profile
  - Health check

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples. Tiered
limits apply when `X-API-Key` is present, offering higher throughput for
identified clients.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.dependencies import AuthServiceDep, UserDBDep
from app.managers.rate_limiter import limiter, tiered
from app.monitoring import get_logger
from app.schemas import (
    MessageResponse,
    SigninRequest,
    SigninResponse,
    SignupRequest,
    UserEnvelope,
    UserResponse,
)
from app.utils.helpers import host

router = APIRouter(prefix="/users", tags=["👤 Users"])

logger = get_logger(__name__)

USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "fullName": "Alice Smith",
    "email": "alice@example.com",
    "profileImageUrl": None,
    "role": "USER",
    "createdAt": "2025-01-01T00:00:00Z",
}

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {
        "application/json": {"example": {"success": False, "message": "Rate limit exceeded"}},
    },
}


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=UserEnvelope,
    status_code=HTTP_201_CREATED,
    summary="Sign up",
    description="Create a new account. The password is stored as an Argon2 hash.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "User created successfully",
                        "user": USER_EXAMPLE,
                    },
                },
            },
        },
        400: {
            "description": "Validation failed or email already registered",
            "content": {
                "application/json": {
                    "example": {"success": False, "message": "User with this email already exists"},
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="users_signup",
)
@limiter.limit(tiered("30/hour", "10/hour"))
async def signup(
    request: Request,
    response: Response,
    payload: Annotated[
        SignupRequest,
        Body(
            examples=[
                {
                    "fullName": "Alice Smith",
                    "email": "alice@example.com",
                    "password": "secret123",
                },
            ],
        ),
    ],
    auth: AuthServiceDep,
) -> UserEnvelope:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    payload : SignupRequest
        Full name, email, password and optional profile image.
    auth : AuthService
        Authentication service.

    Returns
    -------
    UserEnvelope
        Created user without credentials.
    """
    user = await auth.signup(payload)
    return UserEnvelope(message="User created successfully", user=UserResponse.model_validate(user))


@router.post(
    "/signin",
    response_class=ORJSONResponse,
    response_model=SigninResponse,
    summary="Sign in",
    description="Exchange email and password for a bearer token valid for 7 days.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Login successful",
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "user": USER_EXAMPLE,
                    },
                },
            },
        },
        400: {
            "description": "Invalid credentials",
            "content": {
                "application/json": {
                    "example": {"success": False, "message": "Invalid email or password"},
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="users_signin",
)
@limiter.limit(tiered("60/minute", "10/minute"))
async def signin(
    request: Request,
    response: Response,
    payload: SigninRequest,
    auth: AuthServiceDep,
) -> SigninResponse:
    """
    Authenticate with email and password.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    payload : SigninRequest
        Email and password.
    auth : AuthService
        Authentication service.

    Returns
    -------
    SigninResponse
        Access token and the public user.
    """
    token, user = await auth.signin(payload)
    logger.info(f"Signin succeeded for ip: {host(request)}")
    return SigninResponse(token=token, user=UserResponse.model_validate(user))


@router.get(
    "/profile",
    response_class=ORJSONResponse,
    response_model=UserEnvelope,
    summary="Get profile",
    description="Return the authenticated user's public profile.",
    responses={
        200: {"content": {"application/json": {"example": {"success": True, "user": USER_EXAMPLE}}}},
        401: {
            "description": "Missing or invalid token",
            "content": {
                "application/json": {
                    "example": {"success": False, "message": "Access denied. No token provided."},
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="users_profile",
)
@limiter.limit(tiered("120/minute", "30/minute"))
async def get_profile(
    request: Request,
    response: Response,
    current_user: UserDBDep,
) -> UserEnvelope:
    """
    Get the current user's profile.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    current_user : UserDB
        User resolved from the bearer token.

    Returns
    -------
    UserEnvelope
        The public user.
    """
    return UserEnvelope(user=UserResponse.model_validate(current_user))


@router.get(
    "/health",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="User routes health",
    operation_id="users_health",
)
async def users_health() -> MessageResponse:
    return MessageResponse(message="User routes are working")
