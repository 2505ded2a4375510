"""Data models for container operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CaptureResult:
    """Output of a non-interactive execute-command run."""

    stdout: str
    stderr: str
    error: str | None = None

    @property
    def output(self) -> str:
        return f"{self.stdout}\n{self.stderr}"


@dataclass(frozen=True)
class ProbeResult:
    """Shell chosen for an image. Only conclusive results are worth caching."""

    shell: str
    conclusive: bool
