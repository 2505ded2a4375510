"""Detect which shell a container image provides."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .models import ProbeResult

if TYPE_CHECKING:
    from ...core.context import ContainerContext
    from .session import SessionLauncher

logger = logging.getLogger(__name__)

PREFERRED_SHELL = "/bin/bash"
FALLBACK_SHELL = "/bin/sh"

MISSING_MESSAGE = r"[^\n]*(?:not found|no such file or directory)"


class ShellProber:
    def __init__(
        self,
        launcher: SessionLauncher,
        preferred_shell: str = PREFERRED_SHELL,
        fallback_shell: str = FALLBACK_SHELL,
    ) -> None:
        self.launcher = launcher
        self.preferred_shell = preferred_shell
        self.fallback_shell = fallback_shell
        shell_name = re.escape(preferred_shell.rsplit("/", 1)[-1])
        # Only a complaint about the shell itself counts, not e.g. a missing session-manager-plugin
        self._missing_pattern = re.compile(rf"\b{shell_name}\b{MISSING_MESSAGE}", re.IGNORECASE)

    def probe(self, context: ContainerContext) -> ProbeResult:
        """Ask the container for ``<preferred> --version`` and fall back when it is missing or the probe fails."""
        result = self.launcher.run_capture(context, f"{self.preferred_shell} --version")

        if self._missing_pattern.search(result.output):
            logger.debug("%s missing in image %s, using %s", self.preferred_shell, context.image, self.fallback_shell)
            return ProbeResult(shell=self.fallback_shell, conclusive=True)

        if result.error:
            logger.warning(
                "Shell probe failed for container %s (%s): %s; using %s",
                context.container_name,
                context.short_task_id,
                result.error,
                self.fallback_shell,
            )
            logger.debug("Probe stdout=%r stderr=%r", result.stdout, result.stderr)
            return ProbeResult(shell=self.fallback_shell, conclusive=False)

        return ProbeResult(shell=self.preferred_shell, conclusive=True)
