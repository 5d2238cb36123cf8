"""Delete-and-wait building block shared by the type-specific workflows."""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Iterable

from botocore.exceptions import ClientError

from ..exceptions import StackTerminationError
from ..inventory import select_by_type
from ..models import Stack, StackType
from ..utils import get_error_code, get_logger, is_complete_status
from .executor import Executor


if TYPE_CHECKING:
    from ..aws.stack_manager import StackDeleter, StackLister, StackWaiter

logger = get_logger()


def terminate_stacks(
    stacks: Iterable[Stack], stack_deleter: StackDeleter, stack_waiter: StackWaiter
) -> None:
    """Delete each stack in turn and wait for it to settle.

    Every stack is attempted. Raises StackTerminationError afterwards if any
    of them ended in a status other than *_COMPLETE.
    """
    failures: dict[str, str] = {}
    for stack in stacks:
        logger.info(f"Terminating {stack.stack_type} stack {stack.name}")
        try:
            stack_deleter.delete_stack(stack.name)
            final = stack_waiter.await_final_status(stack.name)
        except ClientError as e:
            logger.error(
                f"Couldn't delete stack {stack.name}: {e}",
                extra={"error_code": get_error_code(e)},
            )
            failures[stack.name] = get_error_code(e) or "error"
            continue
        except Exception as e:
            logger.error(f"Couldn't delete stack {stack.name}: {e}")
            failures[stack.name] = "error"
            continue
        if final is not None and not is_complete_status(final.status):
            logger.error(
                f"Stack {stack.name} ended in failed status {final.status} {final.status_reason}"
            )
            failures[stack.name] = final.status

    if failures:
        raise StackTerminationError(failures)


def stack_terminator(
    stack_type: StackType,
    stack_lister: StackLister,
    stack_deleter: StackDeleter,
    stack_waiter: StackWaiter,
    predicate: Callable[[Stack], bool] = lambda stack: True,
) -> Executor:
    """Executor that terminates every live stack of a type matching ``predicate``.

    The inventory is listed when the executor runs, not when it is built, so
    stacks removed by earlier steps are not deleted twice.
    """

    def terminator() -> None:
        stacks = select_by_type(stack_lister.list_stacks(stack_type), stack_type)
        targets = [stack for stack in stacks if predicate(stack)]
        if not targets:
            logger.debug(f"No {stack_type.value} stacks to terminate")
            return
        terminate_stacks(targets, stack_deleter, stack_waiter)

    terminator.__name__ = f"{stack_type.value}_terminator"
    return terminator


def in_environment(environment_name: str) -> Callable[[Stack], bool]:
    return lambda stack: stack.tags.get("environment") == environment_name
