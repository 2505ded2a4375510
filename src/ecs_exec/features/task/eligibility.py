"""Decide whether a container is a valid execute-command target."""

from __future__ import annotations

from ...core.errors import MalformedGroupError
from ...core.types import ContainerDescription, Health, SkipReason, TaskDescription, Verdict


def parse_service_name(task: TaskDescription) -> str:
    """Return the service half of a ``<prefix>:<serviceName>`` task group."""
    parts = task.group.split(":")
    if len(parts) != 2:
        raise MalformedGroupError(task.task_arn, task.group)
    return parts[1]


def is_eligible(
    task: TaskDescription,
    container: ContainerDescription,
    desired_service_name: str,
    require_healthy: bool = False,
) -> Verdict:
    """Apply the eligibility rules in order; the first failing rule decides the skip reason.

    A malformed task group is not a skip: it raises MalformedGroupError.
    """
    service_name = parse_service_name(task)

    if desired_service_name and service_name != desired_service_name:
        return Verdict.skip(SkipReason.SERVICE_MISMATCH)

    if not task.enable_execute_command:
        return Verdict.skip(SkipReason.EXECUTE_DISABLED)

    if require_healthy:
        if task.health is not Health.HEALTHY:
            return Verdict.skip(SkipReason.TASK_UNHEALTHY)
        if container.health is not Health.HEALTHY:
            return Verdict.skip(SkipReason.CONTAINER_UNHEALTHY)

    return Verdict.ok()
