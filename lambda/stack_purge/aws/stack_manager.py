"""CloudFormation and S3 operations used by purge workflows.

The Protocol classes describe the narrow capabilities each workflow needs, so
workflows can be driven by an in-memory fake in tests. ``StackManager``
implements all of them on top of boto3.
"""

from __future__ import annotations
from typing import Protocol

import boto3
from botocore.exceptions import ClientError, WaiterError

from ..models import STACK_STATUS_DELETE_FAILED, Resource, Stack, StackType
from ..models.config import (
    DRY_RUN,
    NAMESPACE,
    STACK_WAIT_DELAY_SECONDS,
    STACK_WAIT_MAX_ATTEMPTS,
)
from ..utils import (
    convert_tags_to_dict,
    get_error_code,
    get_logger,
    strip_namespace,
)

logger = get_logger()

# S3 DeleteObjects accepts at most 1000 keys per request
S3_DELETE_BATCH_SIZE = 1000


class StackLister(Protocol):
    def list_stacks(self, stack_type: StackType) -> list[Stack]: ...

    def get_resources_for_stack(self, stack: Stack) -> list[Resource]: ...


class StackDeleter(Protocol):
    def delete_stack(self, stack_name: str) -> None: ...


class StackWaiter(Protocol):
    def await_final_status(self, stack_name: str) -> Stack | None: ...


class BucketObjectDeleter(Protocol):
    def delete_s3_bucket_objects(self, bucket_name: str) -> None: ...


class BucketDeleter(Protocol):
    def delete_s3_bucket(self, bucket_name: str) -> None: ...


class StackOperations(
    StackLister, StackDeleter, StackWaiter, BucketObjectDeleter, BucketDeleter, Protocol
):
    """Everything the purge orchestrator hands to its workflows."""


class RolesetManager(Protocol):
    def delete_environment_roleset(self, environment_name: str) -> None: ...

    def delete_pipeline_roleset(self, service_name: str) -> None: ...


def _stack_does_not_exist(error: ClientError) -> bool:
    return get_error_code(error) == "ValidationError" and "does not exist" in str(
        error
    )


class StackManager:
    """boto3 implementation of the stack and bucket capabilities."""

    def __init__(
        self,
        region: str | None = None,
        namespace: str = NAMESPACE,
        dry_run: bool = DRY_RUN,
        wait_delay: int = STACK_WAIT_DELAY_SECONDS,
        wait_max_attempts: int = STACK_WAIT_MAX_ATTEMPTS,
    ):
        self.cfn = boto3.client("cloudformation", region_name=region)
        self.s3 = boto3.client("s3", region_name=region)
        self.namespace = namespace
        self.dry_run = dry_run
        self.wait_delay = wait_delay
        self.wait_max_attempts = wait_max_attempts

    def _to_stack(self, summary: dict) -> Stack:
        return Stack(
            name=summary["StackName"],
            status=summary["StackStatus"],
            status_reason=summary.get("StackStatusReason", ""),
            tags=strip_namespace(
                convert_tags_to_dict(summary.get("Tags")), self.namespace
            ),
            last_update_time=summary.get("LastUpdatedTime")
            or summary.get("CreationTime"),
        )

    def list_stacks(self, stack_type: StackType = StackType.ALL) -> list[Stack]:
        """List live stacks carrying this namespace's tags."""
        stacks = []
        paginator = self.cfn.get_paginator("describe_stacks")
        for page in paginator.paginate():
            for summary in page["Stacks"]:
                stack = self._to_stack(summary)
                if not stack.tags:
                    continue
                if stack_type != StackType.ALL and stack.stack_type != stack_type.value:
                    continue
                stacks.append(stack)

        logger.debug(f"Found {len(stacks)} stacks of type {stack_type.value}")
        return stacks

    def get_resources_for_stack(self, stack: Stack) -> list[Resource]:
        response = self.cfn.describe_stack_resources(StackName=stack.name)
        return [
            Resource(
                logical_id=resource["LogicalResourceId"],
                physical_resource_id=resource["PhysicalResourceId"],
                resource_type=resource.get("ResourceType", ""),
            )
            for resource in response["StackResources"]
            if resource.get("PhysicalResourceId")
        ]

    def delete_stack(self, stack_name: str) -> None:
        if self.dry_run:
            logger.info(f"[DRY-RUN] Would delete CloudFormation stack {stack_name}")
            return
        logger.info(f"Deleting CloudFormation stack {stack_name}")
        self.cfn.delete_stack(StackName=stack_name)

    def await_final_status(self, stack_name: str) -> Stack | None:
        """
        Wait for a stack deletion to finish.

        Returns:
            None once the stack no longer exists. Otherwise the stack as last
            seen by the waiter: a failed status, or an in-progress one if the
            attempt limit ran out. In dry-run mode nothing was deleted, so the
            current stack is returned without waiting.
        """
        if self.dry_run:
            try:
                response = self.cfn.describe_stacks(StackName=stack_name)
            except ClientError as e:
                if _stack_does_not_exist(e):
                    return None
                raise
            return self._to_stack(response["Stacks"][0])

        waiter = self.cfn.get_waiter("stack_delete_complete")
        try:
            waiter.wait(
                StackName=stack_name,
                WaiterConfig={
                    "Delay": self.wait_delay,
                    "MaxAttempts": self.wait_max_attempts,
                },
            )
        except WaiterError as e:
            last_response = e.last_response or {}
            stacks = last_response.get("Stacks")
            if stacks:
                stack = self._to_stack(stacks[0])
                logger.warning(f"Stack {stack_name} stopped in status {stack.status}")
                return stack
            reason = last_response.get("Error", {}).get("Message") or str(e)
            logger.warning(f"Stack {stack_name} status unknown: {reason}")
            return Stack(
                name=stack_name,
                status=STACK_STATUS_DELETE_FAILED,
                status_reason=reason,
            )

        logger.debug(f"Stack {stack_name} no longer exists")
        return None

    def delete_s3_bucket_objects(self, bucket_name: str) -> None:
        """Delete every object version and delete marker in a bucket."""
        try:
            paginator = self.s3.get_paginator("list_object_versions")
            deleted = 0
            for page in paginator.paginate(Bucket=bucket_name):
                keys = [
                    {"Key": item["Key"], "VersionId": item["VersionId"]}
                    for item in page.get("Versions", []) + page.get("DeleteMarkers", [])
                ]
                if not keys:
                    continue
                if self.dry_run:
                    deleted += len(keys)
                    continue
                for start in range(0, len(keys), S3_DELETE_BATCH_SIZE):
                    batch = keys[start : start + S3_DELETE_BATCH_SIZE]
                    self.s3.delete_objects(
                        Bucket=bucket_name, Delete={"Objects": batch, "Quiet": True}
                    )
                    deleted += len(batch)

            if self.dry_run:
                logger.info(
                    f"[DRY-RUN] Would delete {deleted} objects from bucket {bucket_name}"
                )
            else:
                logger.info(f"Deleted {deleted} objects from bucket {bucket_name}")
        except ClientError as e:
            if get_error_code(e) == "NoSuchBucket":
                logger.info(f"S3 bucket {bucket_name} does not exist")
                return
            raise

    def delete_s3_bucket(self, bucket_name: str) -> None:
        if self.dry_run:
            logger.info(f"[DRY-RUN] Would delete S3 bucket {bucket_name}")
            return
        try:
            self.s3.delete_bucket(Bucket=bucket_name)
            logger.info(f"Deleted S3 bucket {bucket_name}")
        except ClientError as e:
            if get_error_code(e) == "NoSuchBucket":
                logger.info(f"S3 bucket {bucket_name} already deleted")
                return
            raise
