"""Teardown workflows and executor composition."""

from .executor import Executor, new_pipeline_executor, new_pipeline_executor_no_stop
from .bucket import BucketTerminateWorkflow
from .environment import EnvironmentWorkflow
from .pipeline import PipelineWorkflow
from .service import ServiceWorkflow
from .purge import PurgeResult, PurgeWorkflow, new_purge, run_purge

__all__ = [
    "Executor",
    "new_pipeline_executor",
    "new_pipeline_executor_no_stop",
    "BucketTerminateWorkflow",
    "EnvironmentWorkflow",
    "PipelineWorkflow",
    "ServiceWorkflow",
    "PurgeResult",
    "PurgeWorkflow",
    "new_purge",
    "run_purge",
]
