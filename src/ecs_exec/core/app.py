"""Main application logic for ecs-exec CLI."""

from __future__ import annotations

import threading

from ..aws_service import ECSService
from ..core.config import ExecConfig
from ..core.types import WalkSummary
from ..core.utils import print_info, print_success, print_warning
from ..features.cluster.walker import ClusterWalker
from ..features.container.dispatcher import SessionDispatcher
from ..features.container.prober import ShellProber
from ..features.container.session import SessionLauncher
from ..features.container.shell_cache import ShellCache


def build_walker(ecs_service: ECSService, config: ExecConfig) -> ClusterWalker:
    """Wire the cache, prober, launcher and the single-session lock into a walker."""
    launcher = SessionLauncher(profile=config.profile, region=config.region)
    dispatcher = SessionDispatcher(
        cache=ShellCache(config.cache_path, refresh=config.refresh_cache),
        prober=ShellProber(launcher),
        launcher=launcher,
        execution_lock=threading.BoundedSemaphore(1),
        dry_run=config.dry_run,
    )
    return ClusterWalker(ecs_service, dispatcher, config)


def run(ecs_service: ECSService, config: ExecConfig) -> WalkSummary:
    summary = build_walker(ecs_service, config).walk()
    display_summary(summary, config)
    return summary


def display_summary(summary: WalkSummary, config: ExecConfig) -> None:
    if summary.sessions == 0 and summary.failed_sessions == 0:
        target = f" for service '{config.service_name}'" if config.service_name else ""
        print_warning(f"No eligible containers found{target}")
    elif config.dry_run:
        print_success(f"{summary.sessions} command(s) printed")
    elif summary.failed_sessions:
        print_warning(f"{summary.sessions} session(s) completed, {summary.failed_sessions} failed")
    else:
        print_success(f"{summary.sessions} session(s) completed")

    details = ", ".join(f"{count} {reason.value}" for reason, count in summary.skipped.items())
    skipped_text = f" ({details})" if details else ""
    print_info(
        f"Scanned {summary.clusters} cluster(s), {summary.tasks} task(s); "
        f"skipped {summary.skipped_total} container(s){skipped_text}"
    )
