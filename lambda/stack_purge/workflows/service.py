"""Service teardown steps."""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..models import StackType
from .executor import Executor
from .terminator import in_environment, stack_terminator


if TYPE_CHECKING:
    from ..aws.stack_manager import StackDeleter, StackLister, StackWaiter


class ServiceWorkflow:
    def service_undeployer(
        self,
        service_name: str,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        """Remove one service's stack from one environment."""
        undeployer = stack_terminator(
            StackType.SERVICE,
            stack_lister,
            stack_deleter,
            stack_waiter,
            predicate=lambda stack: stack.tags.get("service") == service_name
            and stack.tags.get("environment") == environment_name,
        )
        undeployer.__name__ = f"undeploy_{service_name}_{environment_name}"
        return undeployer

    def service_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        """Sweep every remaining service stack deployed to an environment."""
        terminator = stack_terminator(
            StackType.SERVICE,
            stack_lister,
            stack_deleter,
            stack_waiter,
            predicate=in_environment(environment_name),
        )
        terminator.__name__ = f"service_terminator_{environment_name}"
        return terminator
