"""Context objects for passing container identity between components."""

from __future__ import annotations

from dataclasses import dataclass

from .utils import extract_name_from_arn


@dataclass
class ContainerContext:
    """Everything needed to address one container with execute-command."""

    cluster_arn: str
    task_arn: str
    container_name: str
    image: str
    service_name: str = ""

    @property
    def task_id(self) -> str:
        """Extract task ID from task ARN."""
        return extract_name_from_arn(self.task_arn)

    @property
    def short_task_id(self) -> str:
        """Extract short task ID for display."""
        return self.task_id[:8]

    @property
    def cluster_name(self) -> str:
        return extract_name_from_arn(self.cluster_arn)
