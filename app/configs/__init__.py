from app.configs.settings import (
    CONFIG_MAP,
    LimiterConfig,
    pool_kwargs,
    settings,
)

__all__ = [
    "CONFIG_MAP",
    "LimiterConfig",
    "pool_kwargs",
    "settings",
]
