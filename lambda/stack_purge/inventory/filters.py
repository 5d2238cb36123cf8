"""Pure filters over a stack inventory.

Both functions preserve the relative order of the input and never raise on
unexpected tags or statuses.
"""

from __future__ import annotations
from typing import Iterable

from ..models import Stack, StackType


def exclude_by_status(stacks: Iterable[Stack], statuses: Iterable[str]) -> list[Stack]:
    """Drop stacks whose status is in ``statuses``.

    Used to skip stacks in states the control plane won't delete from,
    e.g. ROLLBACK_COMPLETE.
    """
    excluded = set(statuses)
    return [stack for stack in stacks if stack.status not in excluded]


def select_by_type(stacks: Iterable[Stack], stack_type: StackType | str) -> list[Stack]:
    """Keep stacks whose ``type`` tag equals ``stack_type``."""
    wanted = stack_type.value if isinstance(stack_type, StackType) else stack_type
    return [stack for stack in stacks if stack.tags.get("type") == wanted]
