"""Pipeline teardown steps."""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..exceptions import ServiceNotFoundError
from ..models import StackType
from ..utils import get_logger
from .executor import Executor
from .terminator import stack_terminator


if TYPE_CHECKING:
    from ..aws.stack_manager import RolesetManager, StackDeleter, StackLister, StackWaiter

logger = get_logger()


class PipelineWorkflow:
    """Steps share the service name resolved by ``service_finder``."""

    def __init__(self):
        self.service_name = ""

    def service_finder(self, service_name: str | None) -> Executor:
        def finder() -> None:
            if not service_name:
                raise ServiceNotFoundError("pipeline stack has no service tag")
            logger.info(f"Terminating pipeline for service {service_name}")
            self.service_name = service_name

        finder.__name__ = f"service_finder_{service_name}"
        return finder

    def pipeline_terminator(
        self,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        # Predicate reads self.service_name at run time, after service_finder
        terminator = stack_terminator(
            StackType.PIPELINE,
            stack_lister,
            stack_deleter,
            stack_waiter,
            predicate=lambda stack: bool(self.service_name)
            and stack.tags.get("service") == self.service_name,
        )
        terminator.__name__ = "pipeline_terminator"
        return terminator

    def pipeline_roleset_terminator(self, roleset_manager: RolesetManager) -> Executor:
        def roleset_terminator() -> None:
            if not self.service_name:
                raise ServiceNotFoundError("no service resolved for pipeline roleset")
            roleset_manager.delete_pipeline_roleset(self.service_name)

        roleset_terminator.__name__ = "pipeline_roleset_terminator"
        return roleset_terminator
