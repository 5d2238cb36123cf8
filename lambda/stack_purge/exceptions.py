"""Exceptions raised by purge workflows."""

from __future__ import annotations


class StackTerminationError(Exception):
    """One or more stacks did not reach a successful terminal status."""

    def __init__(self, failures: dict[str, str]):
        self.failures = failures
        details = ", ".join(f"{name} ({status})" for name, status in failures.items())
        super().__init__(f"Stacks failed to terminate: {details}")


class ServiceNotFoundError(Exception):
    """A pipeline stack carries no service tag to terminate against."""
