"""Pytest configuration and shared fixtures for stack purge tests."""

from __future__ import annotations
import datetime
import pytest
from botocore.exceptions import ClientError

from stack_purge.models import Resource, Stack, StackType


class StackBuilder:
    """Builder pattern for creating test stacks."""

    def __init__(self):
        self._name = "mu-test-stack"
        self._status = "CREATE_COMPLETE"
        self._status_reason = ""
        self._tags: dict[str, str] = {}
        self._last_update_time = datetime.datetime(
            2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc
        )

    def with_name(self, name: str) -> StackBuilder:
        self._name = name
        return self

    def with_status(self, status: str, reason: str = "") -> StackBuilder:
        self._status = status
        self._status_reason = reason
        return self

    def with_type(self, stack_type: StackType | str) -> StackBuilder:
        value = stack_type.value if isinstance(stack_type, StackType) else stack_type
        self._tags["type"] = value
        return self

    def with_service(self, service: str) -> StackBuilder:
        self._tags["service"] = service
        return self

    def with_environment(self, environment: str) -> StackBuilder:
        self._tags["environment"] = environment
        return self

    def with_tag(self, key: str, value: str) -> StackBuilder:
        self._tags[key] = value
        return self

    def build(self) -> Stack:
        return Stack(
            name=self._name,
            status=self._status,
            status_reason=self._status_reason,
            tags=dict(self._tags),
            last_update_time=self._last_update_time,
        )


def client_error(code: str, message: str = "boom", operation: str = "Operation"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeStackManager:
    """In-memory stand-in for StackManager.

    Every call is recorded in ``calls`` as a tuple, in invocation order.
    Successfully deleted stacks disappear from later listings.
    """

    def __init__(
        self,
        stacks: list[Stack] | None = None,
        resources: dict[str, list[Resource]] | None = None,
        final_statuses: dict[str, str] | None = None,
        fail_list: Exception | None = None,
        fail_delete: dict[str, Exception] | None = None,
        fail_drain: dict[str, Exception] | None = None,
        fail_bucket_delete: dict[str, Exception] | None = None,
    ):
        self.stacks = list(stacks or [])
        self.resources = resources or {}
        self.final_statuses = final_statuses or {}
        self.fail_list = fail_list
        self.fail_delete = fail_delete or {}
        self.fail_drain = fail_drain or {}
        self.fail_bucket_delete = fail_bucket_delete or {}
        self.deleted: set[str] = set()
        self.calls: list[tuple] = []

    def list_stacks(self, stack_type: StackType = StackType.ALL) -> list[Stack]:
        self.calls.append(("list_stacks", stack_type))
        if self.fail_list is not None:
            raise self.fail_list
        return [
            stack
            for stack in self.stacks
            if stack.name not in self.deleted
            and (stack_type == StackType.ALL or stack.tags.get("type") == stack_type.value)
        ]

    def get_resources_for_stack(self, stack: Stack) -> list[Resource]:
        self.calls.append(("get_resources_for_stack", stack.name))
        return list(self.resources.get(stack.name, []))

    def delete_stack(self, stack_name: str) -> None:
        self.calls.append(("delete_stack", stack_name))
        if stack_name in self.fail_delete:
            raise self.fail_delete[stack_name]
        if stack_name not in self.final_statuses:
            self.deleted.add(stack_name)

    def await_final_status(self, stack_name: str) -> Stack | None:
        self.calls.append(("await_final_status", stack_name))
        if stack_name in self.final_statuses:
            return Stack(
                name=stack_name,
                status=self.final_statuses[stack_name],
                status_reason="resource in use",
            )
        if stack_name in self.deleted:
            return None
        for stack in self.stacks:
            if stack.name == stack_name:
                return stack
        return None

    def delete_s3_bucket_objects(self, bucket_name: str) -> None:
        self.calls.append(("delete_s3_bucket_objects", bucket_name))
        if bucket_name in self.fail_drain:
            raise self.fail_drain[bucket_name]

    def delete_s3_bucket(self, bucket_name: str) -> None:
        self.calls.append(("delete_s3_bucket", bucket_name))
        if bucket_name in self.fail_bucket_delete:
            raise self.fail_bucket_delete[bucket_name]

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


class FakeRolesetManager:
    def __init__(self, fail: Exception | None = None):
        self.fail = fail
        self.calls: list[tuple] = []

    def delete_environment_roleset(self, environment_name: str) -> None:
        self.calls.append(("delete_environment_roleset", environment_name))
        if self.fail is not None:
            raise self.fail

    def delete_pipeline_roleset(self, service_name: str) -> None:
        self.calls.append(("delete_pipeline_roleset", service_name))
        if self.fail is not None:
            raise self.fail


# Shared fixtures


@pytest.fixture
def stack_builder():
    """Fixture that returns a new StackBuilder."""
    return StackBuilder()


@pytest.fixture
def service_stack():
    return (
        StackBuilder()
        .with_name("svc-web")
        .with_status("UPDATE_COMPLETE")
        .with_type(StackType.SERVICE)
        .with_service("web")
        .with_environment("prod")
        .build()
    )


@pytest.fixture
def environment_stack():
    return (
        StackBuilder()
        .with_name("mu-environment-prod")
        .with_type(StackType.ENVIRONMENT)
        .with_environment("prod")
        .build()
    )


@pytest.fixture
def pipeline_stack():
    return (
        StackBuilder()
        .with_name("mu-pipeline-web")
        .with_type(StackType.PIPELINE)
        .with_service("web")
        .with_environment("prod")
        .build()
    )


@pytest.fixture
def bucket_stack():
    return (
        StackBuilder()
        .with_name("logs-bucket")
        .with_type(StackType.BUCKET)
        .with_environment("prod")
        .build()
    )


@pytest.fixture
def bucket_resources():
    return [
        Resource("LogsBucket", "mu-logs-bucket-a", "AWS::S3::Bucket"),
        Resource("ArchiveBucket", "mu-logs-bucket-b", "AWS::S3::Bucket"),
    ]


@pytest.fixture
def fake_stack_manager():
    """Factory for FakeStackManager instances."""
    return FakeStackManager


@pytest.fixture
def fake_roleset_manager():
    return FakeRolesetManager()


@pytest.fixture
def make_client_error():
    return client_error
