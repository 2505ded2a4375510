"""Shared pytest fixtures for tests."""

from unittest.mock import Mock

import pytest

from ecs_exec.core.context import ContainerContext
from ecs_exec.core.types import ContainerDescription, Health, TaskDescription

CLUSTER_ARN = "arn:aws:ecs:us-east-1:123456789012:cluster/production"


@pytest.fixture
def mock_paginated_client():
    def _create_client(pages: list[dict]) -> Mock:
        client = Mock()
        paginator = Mock()
        paginator.paginate.return_value = pages
        client.get_paginator.return_value = paginator
        return client

    return _create_client


@pytest.fixture
def mock_ecs_client():
    return Mock()


@pytest.fixture
def make_task():
    def _make_task(
        task_id: str = "abc123def456",
        group: str = "service:checkout",
        enable_execute_command: bool = True,
        health: Health = Health.HEALTHY,
        containers: tuple[ContainerDescription, ...] | None = None,
    ) -> TaskDescription:
        if containers is None:
            containers = (ContainerDescription(name="app", image="app:v1", health=Health.HEALTHY),)
        return TaskDescription(
            task_arn=f"arn:aws:ecs:us-east-1:123456789012:task/production/{task_id}",
            cluster_arn=CLUSTER_ARN,
            group=group,
            enable_execute_command=enable_execute_command,
            health=health,
            containers=containers,
        )

    return _make_task


@pytest.fixture
def container_context():
    return ContainerContext(
        cluster_arn=CLUSTER_ARN,
        task_arn="arn:aws:ecs:us-east-1:123456789012:task/production/abc123def456",
        container_name="app",
        image="app:v1",
        service_name="checkout",
    )
