"""Type definitions for ecs-exec."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Health(Enum):
    HEALTHY = "HEALTHY"
    UNHEALTHY = "UNHEALTHY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_status(cls, status: str | None) -> Health:
        """Convert an ECS healthStatus string, treating missing or unexpected values as UNKNOWN."""
        for health in cls:
            if health.value == status:
                return health
        return cls.UNKNOWN


class SkipReason(Enum):
    SERVICE_MISMATCH = "service mismatch"
    EXECUTE_DISABLED = "execute disabled"
    TASK_UNHEALTHY = "task unhealthy"
    CONTAINER_UNHEALTHY = "container unhealthy"


@dataclass(frozen=True)
class ContainerDescription:
    name: str
    image: str
    health: Health = Health.UNKNOWN


@dataclass(frozen=True)
class TaskDescription:
    task_arn: str
    cluster_arn: str
    group: str
    enable_execute_command: bool
    health: Health = Health.UNKNOWN
    containers: tuple[ContainerDescription, ...] = ()


@dataclass(frozen=True)
class Verdict:
    """Outcome of an eligibility check; reason is set only for skips."""

    eligible: bool
    reason: SkipReason | None = None

    @classmethod
    def ok(cls) -> Verdict:
        return cls(eligible=True)

    @classmethod
    def skip(cls, reason: SkipReason) -> Verdict:
        return cls(eligible=False, reason=reason)


@dataclass
class WalkSummary:
    clusters: int = 0
    tasks: int = 0
    sessions: int = 0
    failed_sessions: int = 0
    skipped: dict[SkipReason, int] = field(default_factory=dict)

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())

    def record_skip(self, reason: SkipReason) -> None:
        self.skipped[reason] = self.skipped.get(reason, 0) + 1

    def merge(self, other: WalkSummary) -> None:
        """Add another summary's counts into this one."""
        self.clusters += other.clusters
        self.tasks += other.tasks
        self.sessions += other.sessions
        self.failed_sessions += other.failed_sessions
        for reason, count in other.skipped.items():
            self.skipped[reason] = self.skipped.get(reason, 0) + count
