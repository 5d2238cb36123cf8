"""Logging configuration using AWS Lambda Powertools."""

import os

from aws_lambda_powertools import Logger

# Read log level from environment (default to INFO)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# One logger for the whole process, created at import time
logger = Logger(
    service="stack-purge",
    level=LOG_LEVEL,
)


def get_logger():
    """Get the configured logger instance.

    Returns Powertools Logger with structured JSON output.
    """
    return logger
