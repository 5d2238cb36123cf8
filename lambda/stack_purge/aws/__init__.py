"""boto3-backed collaborators for stack purge."""

from .stack_manager import (
    BucketDeleter,
    BucketObjectDeleter,
    RolesetManager,
    StackDeleter,
    StackLister,
    StackManager,
    StackOperations,
    StackWaiter,
)
from .roleset_manager import IamRolesetManager

__all__ = [
    "BucketDeleter",
    "BucketObjectDeleter",
    "RolesetManager",
    "StackDeleter",
    "StackLister",
    "StackManager",
    "StackOperations",
    "StackWaiter",
    "IamRolesetManager",
]
