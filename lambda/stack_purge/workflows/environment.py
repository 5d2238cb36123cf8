"""Environment teardown steps.

Order matters when these are placed in a plan: services and databases go
before the cluster that hosts them, consul before the VPC it registers
against, roles before the VPC, and the VPC last.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..models import StackType
from ..utils import get_logger
from .executor import Executor
from .service import ServiceWorkflow
from .terminator import in_environment, stack_terminator


if TYPE_CHECKING:
    from ..aws.stack_manager import RolesetManager, StackDeleter, StackLister, StackWaiter

logger = get_logger()


class EnvironmentWorkflow:
    def _terminator(
        self,
        label: str,
        stack_type: StackType,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        terminator = stack_terminator(
            stack_type,
            stack_lister,
            stack_deleter,
            stack_waiter,
            predicate=in_environment(environment_name),
        )
        terminator.__name__ = f"environment_{label}_terminator_{environment_name}"
        return terminator

    def environment_service_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        return ServiceWorkflow().service_terminator(
            environment_name, stack_lister, stack_deleter, stack_waiter
        )

    def environment_db_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        return self._terminator(
            "db", StackType.DATABASE, environment_name,
            stack_lister, stack_deleter, stack_waiter,
        )

    def environment_ecs_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        return self._terminator(
            "ecs", StackType.ENVIRONMENT, environment_name,
            stack_lister, stack_deleter, stack_waiter,
        )

    def environment_consul_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        return self._terminator(
            "consul", StackType.CONSUL, environment_name,
            stack_lister, stack_deleter, stack_waiter,
        )

    def environment_roleset_terminator(
        self, roleset_manager: RolesetManager, environment_name: str
    ) -> Executor:
        def roleset_terminator() -> None:
            logger.info(f"Terminating roleset for environment {environment_name}")
            roleset_manager.delete_environment_roleset(environment_name)

        roleset_terminator.__name__ = (
            f"environment_roleset_terminator_{environment_name}"
        )
        return roleset_terminator

    def environment_elb_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        return self._terminator(
            "elb", StackType.LOADBALANCER, environment_name,
            stack_lister, stack_deleter, stack_waiter,
        )

    def environment_vpc_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        return self._terminator(
            "vpc", StackType.VPC, environment_name,
            stack_lister, stack_deleter, stack_waiter,
        )
