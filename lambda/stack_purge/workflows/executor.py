"""Executor combinators.

An executor is a zero-argument callable representing one step of a teardown
plan. It succeeds by returning and fails by raising.
"""

from __future__ import annotations
from typing import Callable

from botocore.exceptions import ClientError

from ..utils import get_error_code, get_logger

logger = get_logger()

Executor = Callable[[], None]


def _step_name(executor: Executor) -> str:
    return getattr(executor, "__name__", repr(executor))


def new_pipeline_executor(*executors: Executor) -> Executor:
    """Run executors in order, stopping at the first failure.

    The failing executor's exception propagates out of the composite.
    """

    def pipeline() -> None:
        for executor in executors:
            executor()

    return pipeline


def new_pipeline_executor_no_stop(*executors: Executor) -> Executor:
    """Run every executor in order, logging failures instead of raising."""

    def pipeline() -> None:
        for index, executor in enumerate(executors, start=1):
            try:
                executor()
            except ClientError as e:
                logger.error(
                    f"Step {index}/{len(executors)} ({_step_name(executor)}) failed: {e}",
                    extra={"error_code": get_error_code(e)},
                )
            except Exception as e:
                logger.error(
                    f"Step {index}/{len(executors)} ({_step_name(executor)}) failed: {e}"
                )

    return pipeline
