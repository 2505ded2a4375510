import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config
from rich.console import Console

if TYPE_CHECKING:
    from mypy_boto3_ecs import ECSClient

from .aws_service import ECSService
from .core.app import run
from .core.config import DEFAULT_MAX_WORKERS, ExecConfig, default_cache_path
from .core.log import configure_logging

try:
    __version__ = version("ecs-exec")
except PackageNotFoundError:
    __version__ = "dev"

console = Console()
logger = logging.getLogger("ecs_exec")


def main() -> None:
    """Connect to every matching ECS container with execute-command."""
    config = parse_args(sys.argv[1:])
    configure_logging(config.verbose)
    logger.debug("ecs-exec %s, debug mode enabled", __version__)

    try:
        ecs_client = _create_aws_client(config.profile, config.region, config.max_workers)
        run(ECSService(ecs_client), config)
    except KeyboardInterrupt:
        console.print("\nInterrupted", style="yellow")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n❌ Error: {e}", style="red")
        console.print("Make sure your AWS credentials are configured.", style="dim")
        logger.debug("Fatal error", exc_info=True)
        sys.exit(1)


def parse_args(argv: list[str]) -> ExecConfig:
    parser = argparse.ArgumentParser(description="Open execute-command shells into running ECS containers")
    parser.add_argument("--version", action="version", version=f"ecs-exec {__version__}")
    parser.add_argument("-n", "--name", dest="service_name", default="", help="Only connect to this service")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--healthy-only", action="store_true", help="Skip tasks and containers that are not reported HEALTHY"
    )
    parser.add_argument("--refresh-cache", action="store_true", help="Re-probe shells even for cached images")
    parser.add_argument("--cache-file", type=Path, default=None, help="Shell cache location")
    parser.add_argument(
        "--max-workers", type=_positive_int, default=DEFAULT_MAX_WORKERS, help="Tasks evaluated at once"
    )
    parser.add_argument("--profile", help="AWS profile to use for authentication", type=str, default=None)
    parser.add_argument("--region", help="AWS region", type=str, default=None)
    parser.add_argument(
        "--dry-run", action="store_true", help="Print execute-command invocations instead of running them"
    )
    args = parser.parse_args(argv)

    return ExecConfig(
        service_name=args.service_name,
        require_healthy=args.healthy_only,
        refresh_cache=args.refresh_cache,
        cache_path=args.cache_file or default_cache_path(),
        max_workers=args.max_workers,
        profile=args.profile,
        region=args.region,
        dry_run=args.dry_run,
        verbose=args.verbose,
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _create_aws_client(profile_name: str | None, region_name: str | None = None, pool_size: int = 10) -> "ECSClient":
    """Create ECS client with a connection pool sized for concurrent workers."""
    config = Config(
        max_pool_connections=max(pool_size, 10),
        retries={"max_attempts": 2, "mode": "adaptive"},
    )

    session = boto3.Session(profile_name=profile_name) if profile_name else boto3
    return session.client("ecs", region_name=region_name, config=config)


if __name__ == "__main__":
    main()
