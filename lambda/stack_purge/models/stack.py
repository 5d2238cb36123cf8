"""Stack and resource data classes."""

from __future__ import annotations
import datetime
from dataclasses import dataclass, field
from enum import Enum

STACK_STATUS_ROLLBACK_COMPLETE = "ROLLBACK_COMPLETE"
STACK_STATUS_DELETE_FAILED = "DELETE_FAILED"


class StackType(str, Enum):
    """Classification values carried in a stack's ``type`` tag."""

    ALL = "*"
    SERVICE = "service"
    ENVIRONMENT = "environment"
    PIPELINE = "pipeline"
    BUCKET = "bucket"
    DATABASE = "database"
    LOADBALANCER = "loadbalancer"
    VPC = "vpc"
    REPO = "repo"
    SCHEDULE = "schedule"
    CONSUL = "consul"
    IAM = "iam"


@dataclass(frozen=True)
class Stack:
    """Read-only snapshot of a CloudFormation stack."""

    name: str
    status: str
    status_reason: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    last_update_time: datetime.datetime | None = None

    @property
    def stack_type(self) -> str | None:
        return self.tags.get("type")


@dataclass(frozen=True)
class Resource:
    """Physical resource owned by a stack."""

    logical_id: str
    physical_resource_id: str
    resource_type: str = ""
