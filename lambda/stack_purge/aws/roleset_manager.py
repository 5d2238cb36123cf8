"""IAM roleset teardown.

Roles are provisioned as ``iam`` stacks tagged with the environment or
service they serve; removing a roleset means removing those stacks.
"""

from __future__ import annotations

from ..inventory import select_by_type
from ..models import StackType
from ..utils import get_logger
from ..workflows.terminator import terminate_stacks
from .stack_manager import StackOperations

logger = get_logger()


class IamRolesetManager:
    def __init__(self, stack_manager: StackOperations):
        self.stack_manager = stack_manager

    def _iam_stacks(self):
        return select_by_type(
            self.stack_manager.list_stacks(StackType.IAM), StackType.IAM
        )

    def delete_environment_roleset(self, environment_name: str) -> None:
        """Delete every IAM stack scoped to an environment."""
        stacks = [
            stack
            for stack in self._iam_stacks()
            if stack.tags.get("environment") == environment_name
        ]
        logger.info(
            f"Deleting {len(stacks)} IAM stacks for environment {environment_name}"
        )
        terminate_stacks(stacks, self.stack_manager, self.stack_manager)

    def delete_pipeline_roleset(self, service_name: str) -> None:
        """Delete the pipeline IAM stacks of a service (no environment tag)."""
        stacks = [
            stack
            for stack in self._iam_stacks()
            if stack.tags.get("service") == service_name
            and "environment" not in stack.tags
        ]
        logger.info(f"Deleting {len(stacks)} pipeline IAM stacks for {service_name}")
        terminate_stacks(stacks, self.stack_manager, self.stack_manager)
