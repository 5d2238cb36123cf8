"""Purge orchestration for tag-classified CloudFormation stacks."""

__version__ = "0.1.0"
