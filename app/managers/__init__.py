from app.managers.rate_limiter import limiter, rate_limit_exceeded_handler, tiered

__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "tiered",
]
