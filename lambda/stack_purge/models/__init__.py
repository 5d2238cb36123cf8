"""Data models for stack purge."""

from .stack import (
    Resource,
    Stack,
    StackType,
    STACK_STATUS_ROLLBACK_COMPLETE,
    STACK_STATUS_DELETE_FAILED,
)
from .config import Config

__all__ = [
    "Resource",
    "Stack",
    "StackType",
    "STACK_STATUS_ROLLBACK_COMPLETE",
    "STACK_STATUS_DELETE_FAILED",
    "Config",
]
