"""Utility functions for stack purge."""

from .aws_helpers import (
    convert_tags_to_dict,
    strip_namespace,
    is_complete_status,
    get_error_code,
)
from .logging_config import get_logger

__all__ = [
    "convert_tags_to_dict",
    "strip_namespace",
    "is_complete_status",
    "get_error_code",
    "get_logger",
]
