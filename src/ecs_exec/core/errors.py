"""Exceptions raised by ecs-exec."""

from __future__ import annotations


class ECSExecError(Exception):
    """Base class for errors that abort a run."""


class MalformedGroupError(ECSExecError):
    """A task group did not have the ``<prefix>:<serviceName>`` shape."""

    def __init__(self, task_arn: str, group: str) -> None:
        super().__init__(f"Invalid service group {group!r} on task {task_arn}")
        self.task_arn = task_arn
        self.group = group
