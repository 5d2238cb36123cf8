"""Purge orchestration.

One run lists every namespaced stack, drops the ones CloudFormation won't
delete, and builds a single plan in dependency order:

    services -> environments -> pipelines -> buckets

The plan runs with continue-on-error semantics: a failing step is logged and
the next one still runs. The run itself reports success once the plan has
been attempted.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from botocore.exceptions import ClientError

from ..inventory import exclude_by_status, select_by_type
from ..models import STACK_STATUS_ROLLBACK_COMPLETE, Stack, StackType
from ..progress import PurgeTable
from ..utils import get_error_code, get_logger
from .bucket import BucketTerminateWorkflow
from .environment import EnvironmentWorkflow
from .executor import Executor, new_pipeline_executor, new_pipeline_executor_no_stop
from .pipeline import PipelineWorkflow
from .service import ServiceWorkflow


if TYPE_CHECKING:
    from ..aws.stack_manager import RolesetManager, StackOperations

logger = get_logger()

# Statuses CloudFormation rejects delete requests for, or that need no purge
EXCLUDED_STATUSES = [STACK_STATUS_ROLLBACK_COMPLETE]

# Plan order. Kinds not listed (database, loadbalancer, vpc, repo, schedule)
# are removed by the environment steps or not purged yet; supporting one means
# adding it here with a planner method.
PURGE_ORDER = [
    StackType.SERVICE,
    StackType.ENVIRONMENT,
    StackType.PIPELINE,
    StackType.BUCKET,
]


@dataclass
class PurgeResult:
    stack_count: int = 0
    step_count: int = 0


class PurgeWorkflow:
    def __init__(
        self,
        stack_manager: StackOperations,
        roleset_manager: RolesetManager,
        table: PurgeTable | None = None,
    ):
        self.stack_manager = stack_manager
        self.roleset_manager = roleset_manager
        self.table = table
        self.result = PurgeResult()
        self._planners = {
            StackType.SERVICE: self._plan_service,
            StackType.ENVIRONMENT: self._plan_environment,
            StackType.PIPELINE: self._plan_pipeline,
            StackType.BUCKET: self._plan_bucket,
        }

    def list_purgeable_stacks(self) -> list[Stack]:
        try:
            stacks = self.stack_manager.list_stacks(StackType.ALL)
        except ClientError as e:
            logger.warning(
                f"Couldn't list stacks (all): {e}",
                extra={"error_code": get_error_code(e)},
            )
            stacks = []
        except Exception as e:
            logger.warning(f"Couldn't list stacks (all): {e}")
            stacks = []
        return exclude_by_status(stacks, EXCLUDED_STATUSES)

    def _plan_service(self, stack: Stack) -> list[Executor]:
        service_workflow = ServiceWorkflow()
        environment_name = stack.tags.get("environment", "")
        manager = self.stack_manager
        return [
            service_workflow.service_undeployer(
                stack.tags.get("service", ""), environment_name, manager, manager, manager
            ),
            service_workflow.service_terminator(environment_name, manager, manager, manager),
        ]

    def _plan_environment(self, stack: Stack) -> list[Executor]:
        env_workflow = EnvironmentWorkflow()
        env_name = stack.tags.get("environment", "")
        manager = self.stack_manager
        return [
            env_workflow.environment_service_terminator(env_name, manager, manager, manager),
            env_workflow.environment_db_terminator(env_name, manager, manager, manager),
            env_workflow.environment_ecs_terminator(env_name, manager, manager, manager),
            env_workflow.environment_consul_terminator(env_name, manager, manager, manager),
            env_workflow.environment_roleset_terminator(self.roleset_manager, env_name),
            env_workflow.environment_elb_terminator(env_name, manager, manager, manager),
            env_workflow.environment_vpc_terminator(env_name, manager, manager, manager),
        ]

    def _plan_pipeline(self, stack: Stack) -> list[Executor]:
        pipeline_workflow = PipelineWorkflow()
        manager = self.stack_manager
        return [
            pipeline_workflow.service_finder(stack.tags.get("service")),
            pipeline_workflow.pipeline_terminator(manager, manager, manager),
            pipeline_workflow.pipeline_roleset_terminator(self.roleset_manager),
        ]

    def _plan_bucket(self, stack: Stack) -> list[Executor]:
        logger.info(f"{stack.name} {stack.tags}")
        manager = self.stack_manager
        workflow = BucketTerminateWorkflow(stack)
        return [workflow.bucket_terminator(manager, manager, manager, manager, manager)]

    def build_plan(self, stacks: list[Stack]) -> list[Executor]:
        """Assemble the ordered list of teardown steps for ``stacks``."""
        executors: list[Executor] = []
        for stack_type in PURGE_ORDER:
            planner = self._planners[stack_type]
            for stack in select_by_type(stacks, stack_type):
                executors.extend(planner(stack))
        return executors

    def _report(self, stacks: list[Stack]) -> int:
        stack_count = 0
        for stack in stacks:
            if stack.stack_type is None:
                continue
            if self.table is not None:
                self.table.append_stack(stack)
            stack_count += 1
        if self.table is not None:
            self.table.render()
        return stack_count

    def purge_worker(self) -> Executor:
        def worker() -> None:
            stacks = self.list_purgeable_stacks()
            stack_count = self._report(stacks)

            executors = self.build_plan(stacks)
            self.result = PurgeResult(stack_count=stack_count, step_count=len(executors))
            logger.info(
                f"total of {stack_count} stacks with {len(executors)} steps to purge",
                extra={"stack_count": stack_count, "step_count": len(executors)},
            )

            new_pipeline_executor_no_stop(*executors)()

        return worker


def new_purge(
    stack_manager: StackOperations,
    roleset_manager: RolesetManager,
    table: PurgeTable | None = None,
) -> Executor:
    """Create an executor that purges every namespaced stack."""
    workflow = PurgeWorkflow(stack_manager, roleset_manager, table)
    return new_pipeline_executor(workflow.purge_worker())


def run_purge(
    stack_manager: StackOperations,
    roleset_manager: RolesetManager,
    table: PurgeTable | None = None,
) -> PurgeResult:
    """Run one purge and return the counts it planned.

    Inner step failures are logged only; they never make this raise.
    """
    workflow = PurgeWorkflow(stack_manager, roleset_manager, table)
    new_pipeline_executor(workflow.purge_worker())()
    return workflow.result
