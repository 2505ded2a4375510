"""Launch ``aws ecs execute-command`` sessions into containers."""

from __future__ import annotations

import logging
import shlex
import subprocess

from ...core.context import ContainerContext
from .models import CaptureResult

logger = logging.getLogger(__name__)


class SessionLauncher:
    """Runs execute-command through the AWS CLI (which needs session-manager-plugin installed)."""

    def __init__(self, profile: str | None = None, region: str | None = None, aws_cli: str = "aws") -> None:
        self.profile = profile
        self.region = region
        self.aws_cli = aws_cli

    def build_command(self, context: ContainerContext, command: str) -> list[str]:
        argv = [
            self.aws_cli,
            "ecs",
            "execute-command",
            "--cluster",
            context.cluster_arn,
            "--task",
            context.task_arn,
            "--container",
            context.container_name,
            "--command",
            command,
            "--interactive",
        ]
        if self.profile:
            argv.extend(["--profile", self.profile])
        if self.region:
            argv.extend(["--region", self.region])
        return argv

    def format_command(self, context: ContainerContext, command: str) -> str:
        return shlex.join(self.build_command(context, command))

    def run_interactive(self, context: ContainerContext, command: str) -> int:
        """Run a session attached to this process's stdin/stdout/stderr and return its exit status.

        Raises OSError when the AWS CLI cannot be started.
        """
        argv = self.build_command(context, command)
        logger.debug("Executing command: %s", shlex.join(argv))
        return subprocess.run(argv, check=False).returncode

    def run_capture(self, context: ContainerContext, command: str) -> CaptureResult:
        """Run a one-shot command with output captured. Failures are reported in ``error``, never raised."""
        argv = self.build_command(context, command)
        logger.debug("Executing command: %s", shlex.join(argv))
        try:
            completed = subprocess.run(
                argv, stdin=subprocess.DEVNULL, capture_output=True, text=True, check=False
            )
        except (OSError, subprocess.SubprocessError) as e:
            return CaptureResult(stdout="", stderr="", error=str(e))

        error = None
        if completed.returncode != 0:
            error = f"exit status {completed.returncode}"
        return CaptureResult(stdout=completed.stdout or "", stderr=completed.stderr or "", error=error)
