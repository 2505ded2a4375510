"""AWS ECS service layer - handles all AWS API interactions."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from .core.types import TaskDescription
from .features.cluster.cluster import ClusterService
from .features.task.task import TaskService

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient


class ECSService:
    """Service for interacting with AWS ECS."""

    def __init__(self, ecs_client: ECSClient) -> None:
        self.ecs_client = ecs_client
        # Initialize feature services
        self._cluster = ClusterService(ecs_client)
        self._task = TaskService(ecs_client)

    def list_cluster_arns(self) -> list[str]:
        return self._cluster.list_cluster_arns()

    def iter_task_arn_pages(self, cluster_arn: str) -> Iterator[list[str]]:
        """Lazily yield task ARNs page by page for one cluster."""
        return self._task.iter_task_arn_pages(cluster_arn)

    def describe_tasks(self, cluster_arn: str, task_arns: Sequence[str]) -> list[TaskDescription]:
        """Describe tasks with their containers and health."""
        return self._task.describe_tasks(cluster_arn, task_arns)
