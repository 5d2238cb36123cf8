"""AWS helper functions."""

from __future__ import annotations
from botocore.exceptions import ClientError


def convert_tags_to_dict(tags: list[dict[str, str]] | None) -> dict[str, str]:
    """Convert AWS tag list to dictionary."""
    return {tag["Key"]: tag["Value"] for tag in tags} if tags else {}


def strip_namespace(tags: dict[str, str], namespace: str) -> dict[str, str]:
    """
    Keep only tags prefixed with ``<namespace>:`` and drop the prefix.

    {"mu:type": "service", "Owner": "x"} -> {"type": "service"}
    """
    prefix = f"{namespace}:"
    return {
        key[len(prefix) :]: value
        for key, value in tags.items()
        if key.startswith(prefix)
    }


def is_complete_status(status: str | None) -> bool:
    """True for statuses like CREATE_COMPLETE or DELETE_COMPLETE.

    ROLLBACK_COMPLETE also ends in _COMPLETE and counts as complete here.
    """
    return bool(status) and status.endswith("_COMPLETE")


def get_error_code(error: ClientError) -> str:
    """Extract the AWS error code from a ClientError."""
    return error.response.get("Error", {}).get("Code", "")
