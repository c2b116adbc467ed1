"""Utility exports."""

from .helpers import find_json_object, format_local_time, truncate_with_marker
from .logger import get_logger

__all__ = [
    "get_logger",
    "find_json_object",
    "format_local_time",
    "truncate_with_marker",
]
