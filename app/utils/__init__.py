"""Utility helper functions."""

from app.utils.helpers import get_summary, host, parse_uuid, today_str, utc_now
from app.utils.pagination import PageParams, coerce_positive_int

__all__ = [
    "PageParams",
    "coerce_positive_int",
    "get_summary",
    "host",
    "parse_uuid",
    "today_str",
    "utc_now",
]
