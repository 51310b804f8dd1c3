# app/main.py

"""Blog Platform Backend - accounts, blogs, likes, comments and dashboard stats."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.configs import settings
from app.db import ping_db
from app.errors import (
    BaseAppError,
    BlogNotFoundError,
    CommentNotFoundError,
    DatabaseError,
    ForbiddenError,
    PasswordHashingError,
    UserAuthenticationError,
    ValidationError,
    app_exception_handler,
    app_validation_exception_handler,
    auth_exception_handler,
    blog_exception_handler,
    database_exception_handler,
    http_exception_handler,
    internal_error_handler,
    password_hashing_exception_handler,
    validation_exception_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import configure_logging
from app.routes import blog_router, user_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

configure_logging()

app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for a blogging platform",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)


routes = [
    user_router,
    blog_router,
]

_ = [app.include_router(router, prefix="/api") for router in routes]

errors = [
    (UserAuthenticationError, auth_exception_handler),
    (ForbiddenError, auth_exception_handler),
    (BlogNotFoundError, blog_exception_handler),
    (CommentNotFoundError, blog_exception_handler),
    (ValidationError, app_validation_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (DatabaseError, database_exception_handler),
    (BaseAppError, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (StarletteHTTPException, http_exception_handler),
    (Exception, internal_error_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "version": "1.0.0",
                        "timestamp": "2025-01-01 00:00:00",
                        "database": "connected",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Health check endpoint reporting database reachability.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        ``ok`` with the database connected, ``degraded`` otherwise.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "ok", "version": "1.0.0", "timestamp": "...", "database": "connected"}
    """
    database_ok = await ping_db()
    return HealthCheckResponse(
        status="ok" if database_ok else "degraded",
        version=app.version,
        timestamp=today_str(),
        database="connected" if database_ok else "unavailable",
    )


if __name__ == "__main__":
    from uvicorn import run

    run(app, host="127.0.0.1", port=8000, log_level="info")
