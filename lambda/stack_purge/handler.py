"""Entry points: Lambda handler and command line."""

from __future__ import annotations
import argparse
import json
import time
from typing import Any

from .aws import IamRolesetManager, StackManager
from .models import Config
from .progress import PurgeTable
from .utils import get_logger
from .workflows import run_purge

logger = get_logger()


def purge(config: Config, table: PurgeTable | None = None) -> dict[str, Any]:
    start_time = time.time()
    logger.info(
        f"Starting stack purge (DRY_RUN={config.dry_run}, namespace={config.namespace})"
    )

    stack_manager = StackManager(
        region=config.region,
        namespace=config.namespace,
        dry_run=config.dry_run,
        wait_delay=config.stack_wait_delay_seconds,
        wait_max_attempts=config.stack_wait_max_attempts,
    )
    result = run_purge(stack_manager, IamRolesetManager(stack_manager), table)

    duration = time.time() - start_time
    logger.info(
        f"Purge complete: {result.stack_count} stacks, "
        f"{result.step_count} steps ({duration:.1f}s total)"
    )
    return {
        "dry_run": config.dry_run,
        "namespace": config.namespace,
        "total_stacks": result.stack_count,
        "total_steps": result.step_count,
    }


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Main Lambda handler."""
    config = Config()
    if "dry_run" in event:
        config.dry_run = str(event["dry_run"]).lower() == "true"
    if event.get("namespace"):
        config.namespace = event["namespace"]

    try:
        summary = purge(config)
    except Exception as e:
        logger.error(f"Lambda execution failed: {e}")
        raise

    return {"statusCode": 200, "body": json.dumps(summary)}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    config = Config()
    parser = argparse.ArgumentParser(
        description="Delete every stack of a namespace in dependency order"
    )
    parser.add_argument(
        "-n", "--namespace", default=config.namespace, help="stack tag namespace"
    )
    parser.add_argument("-r", "--region", default=config.region, help="AWS region")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        default=config.dry_run,
        help="log what would be deleted",
    )
    mode.add_argument(
        "--confirm",
        dest="dry_run",
        action="store_false",
        help="actually delete stacks and buckets",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = Config()
    config.namespace = args.namespace
    config.region = args.region
    config.dry_run = args.dry_run

    purge(config, PurgeTable())
    # Best effort: step failures are in the log, the exit code stays 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
