"""Configuration from environment variables."""

import os

# Configuration from environment variables
DRY_RUN = os.environ.get("DRY_RUN", "true").lower() == "true"

# Tag prefix identifying stacks managed by this deployment tool (e.g. "mu:type")
NAMESPACE = os.environ.get("NAMESPACE", "mu")

# Region override; boto3 default resolution applies when empty
TARGET_REGION = os.environ.get("TARGET_REGION", "")

# Stack deletion waiter (botocore stack_delete_complete)
STACK_WAIT_DELAY_SECONDS = int(os.environ.get("STACK_WAIT_DELAY_SECONDS", "5"))
STACK_WAIT_MAX_ATTEMPTS = int(os.environ.get("STACK_WAIT_MAX_ATTEMPTS", "120"))

# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class Config:
    """Configuration singleton."""

    def __init__(self):
        self.dry_run = DRY_RUN
        self.namespace = NAMESPACE
        self.region = TARGET_REGION or None
        self.stack_wait_delay_seconds = STACK_WAIT_DELAY_SECONDS
        self.stack_wait_max_attempts = STACK_WAIT_MAX_ATTEMPTS
