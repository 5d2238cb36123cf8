"""Bucket stack teardown.

CloudFormation refuses to delete a stack that owns a non-empty S3 bucket, so
the bucket is drained first. After the stack delete (successful or not) each
bucket is also deleted directly, in case it survived the stack.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from botocore.exceptions import ClientError

from ..models import Stack
from ..utils import get_error_code, get_logger, is_complete_status
from .executor import Executor


if TYPE_CHECKING:
    from ..aws.stack_manager import (
        BucketDeleter,
        BucketObjectDeleter,
        StackDeleter,
        StackLister,
        StackWaiter,
    )

logger = get_logger()


class BucketTerminateWorkflow:
    def __init__(self, bucket: Stack):
        self.bucket = bucket

    def bucket_terminator(
        self,
        bucket_deleter: BucketDeleter,
        bucket_object_deleter: BucketObjectDeleter,
        stack_deleter: StackDeleter,
        stack_lister: StackLister,
        stack_waiter: StackWaiter,
    ) -> Executor:
        def terminator() -> None:
            stack_name = self.bucket.name
            resources = stack_lister.get_resources_for_stack(self.bucket)
            logger.info(f"Stack {stack_name} owns {len(resources)} resources")
            bucket_names = [resource.physical_resource_id for resource in resources]

            for bucket_name in bucket_names:
                logger.debug(f"Emptying bucket {bucket_name}")
                try:
                    bucket_object_deleter.delete_s3_bucket_objects(bucket_name)
                except ClientError as e:
                    logger.error(
                        f"Couldn't empty S3 bucket {bucket_name}: {e}",
                        extra={"error_code": get_error_code(e)},
                    )
                except Exception as e:
                    logger.error(f"Couldn't empty S3 bucket {bucket_name}: {e}")

            try:
                stack_deleter.delete_stack(stack_name)
            except ClientError as e:
                logger.error(
                    f"Couldn't delete stack {stack_name}: {e}",
                    extra={"error_code": get_error_code(e)},
                )
            except Exception as e:
                logger.error(f"Couldn't delete stack {stack_name}: {e}")

            try:
                final = stack_waiter.await_final_status(stack_name)
            except Exception as e:
                logger.error(f"Couldn't determine final status of stack {stack_name}: {e}")
                final = None
            if final is not None and not is_complete_status(final.status):
                logger.error(
                    f"Stack {stack_name} ended in failed status {final.status} {final.status_reason}"
                )

            for bucket_name in bucket_names:
                try:
                    bucket_deleter.delete_s3_bucket(bucket_name)
                except ClientError as e:
                    logger.error(
                        f"Couldn't delete S3 bucket {bucket_name}: {e}",
                        extra={"error_code": get_error_code(e)},
                    )
                except Exception as e:
                    logger.error(f"Couldn't delete S3 bucket {bucket_name}: {e}")

        terminator.__name__ = f"bucket_terminator_{self.bucket.name}"
        return terminator
