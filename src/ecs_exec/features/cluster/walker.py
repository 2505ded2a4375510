"""Walk every cluster's tasks and hand eligible containers to the dispatcher."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

from ...core.context import ContainerContext
from ...core.types import TaskDescription, WalkSummary
from ...core.utils import extract_name_from_arn
from ..task.eligibility import is_eligible, parse_service_name

if TYPE_CHECKING:
    from ...aws_service import ECSService
    from ...core.config import ExecConfig
    from ..container.dispatcher import SessionDispatcher

logger = logging.getLogger(__name__)


class ClusterWalker:
    """Cluster -> task page -> task traversal.

    Tasks in a page are evaluated concurrently and joined before the next page is
    fetched. Any error from the API or from a worker aborts the whole walk.
    """

    def __init__(self, ecs_service: ECSService, dispatcher: SessionDispatcher, config: ExecConfig) -> None:
        self.ecs_service = ecs_service
        self.dispatcher = dispatcher
        self.config = config

    def walk(self) -> WalkSummary:
        summary = WalkSummary()
        try:
            for cluster_arn in self.ecs_service.list_cluster_arns():
                summary.clusters += 1
                self._walk_cluster(cluster_arn, summary)
        except BaseException:
            self.dispatcher.abort()
            raise
        return summary

    def _walk_cluster(self, cluster_arn: str, summary: WalkSummary) -> None:
        for task_arns in self.ecs_service.iter_task_arn_pages(cluster_arn):
            logger.debug("Found %d tasks in cluster %s", len(task_arns), extract_name_from_arn(cluster_arn))
            if not task_arns:
                continue

            tasks = self.ecs_service.describe_tasks(cluster_arn, task_arns)
            summary.tasks += len(tasks)
            self._evaluate_page(tasks, summary)

    def _evaluate_page(self, tasks: list[TaskDescription], summary: WalkSummary) -> None:
        if not tasks:
            return

        workers = max(1, min(len(tasks), self.config.max_workers))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ecs-exec") as executor:
            futures: list[Future[WalkSummary]] = [executor.submit(self.evaluate_task, task) for task in tasks]
            try:
                for future in as_completed(futures):
                    summary.merge(future.result())
            except BaseException:
                self.dispatcher.abort()
                for future in futures:
                    future.cancel()
                raise

    def evaluate_task(self, task: TaskDescription) -> WalkSummary:
        """Check every container of one task and dispatch the eligible ones in order."""
        # Malformed groups must fail before any container is considered
        service_name = parse_service_name(task)
        outcome = WalkSummary()

        for container in task.containers:
            verdict = is_eligible(task, container, self.config.service_name, self.config.require_healthy)
            if verdict.reason is not None:
                logger.debug(
                    "Skipping container %s of task %s (%s): %s",
                    container.name,
                    extract_name_from_arn(task.task_arn),
                    service_name,
                    verdict.reason.value,
                )
                outcome.record_skip(verdict.reason)
                continue

            context = ContainerContext(
                cluster_arn=task.cluster_arn,
                task_arn=task.task_arn,
                container_name=container.name,
                image=container.image,
                service_name=service_name,
            )
            logger.debug("Dispatching container %s of %s task %s", container.name, service_name, context.short_task_id)
            if self.dispatcher.dispatch(context):
                outcome.sessions += 1
            else:
                outcome.failed_sessions += 1

        return outcome
