"""Task operations for ECS."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from ...core.base import BaseAWSService
from ...core.types import ContainerDescription, Health, TaskDescription
from ...core.utils import batch_items, iter_aws_pages

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient
    from mypy_boto3_ecs.type_defs import ContainerTypeDef, TaskTypeDef

logger = logging.getLogger(__name__)

# DescribeTasks accepts at most 100 task ARNs per call
DESCRIBE_TASKS_BATCH_SIZE = 100


class TaskService(BaseAWSService):
    """Service for ECS task operations."""

    def __init__(self, ecs_client: ECSClient) -> None:
        super().__init__(ecs_client)

    def iter_task_arn_pages(self, cluster_arn: str) -> Iterator[list[str]]:
        """Yield task ARNs one API page at a time. A fresh paginator is used for every call."""
        yield from iter_aws_pages(self.ecs_client, "list_tasks", "taskArns", cluster=cluster_arn)

    def describe_tasks(self, cluster_arn: str, task_arns: Sequence[str]) -> list[TaskDescription]:
        descriptions: list[TaskDescription] = []
        for batch in batch_items(task_arns, DESCRIBE_TASKS_BATCH_SIZE):
            response = self.ecs_client.describe_tasks(cluster=cluster_arn, tasks=batch)

            for failure in response.get("failures", []):
                logger.debug(
                    "Task %s could not be described: %s", failure.get("arn", "?"), failure.get("reason", "unknown")
                )

            descriptions.extend(_parse_task(task, cluster_arn) for task in response.get("tasks", []))

        return descriptions


def _parse_task(task: TaskTypeDef, cluster_arn: str) -> TaskDescription:
    """Create a task description from an AWS task."""
    return TaskDescription(
        task_arn=task["taskArn"],
        cluster_arn=task.get("clusterArn", cluster_arn),
        group=task.get("group", ""),
        enable_execute_command=bool(task.get("enableExecuteCommand", False)),
        health=Health.from_status(task.get("healthStatus")),
        containers=tuple(_parse_container(container) for container in task.get("containers", [])),
    )


def _parse_container(container: ContainerTypeDef) -> ContainerDescription:
    return ContainerDescription(
        name=container.get("name", ""),
        image=container.get("image", ""),
        health=Health.from_status(container.get("healthStatus")),
    )
