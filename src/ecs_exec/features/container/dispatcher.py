"""Resolve a shell for each eligible container and run its session, one at a time."""

from __future__ import annotations

import logging
import subprocess
import threading
from typing import TYPE_CHECKING

from ...core.utils import console, print_info, restore_terminal

if TYPE_CHECKING:
    from ...core.context import ContainerContext
    from .prober import ShellProber
    from .session import SessionLauncher
    from .shell_cache import ShellCache

logger = logging.getLogger(__name__)


class SessionDispatcher:
    """Connects to containers on behalf of concurrent workers.

    Shell resolution runs in the calling worker. The launch itself happens while
    holding ``execution_lock``: sessions share the terminal's standard streams, so
    only one may run at a time.
    """

    def __init__(
        self,
        cache: ShellCache,
        prober: ShellProber,
        launcher: SessionLauncher,
        execution_lock: threading.Semaphore,
        dry_run: bool = False,
    ) -> None:
        self.cache = cache
        self.prober = prober
        self.launcher = launcher
        self.execution_lock = execution_lock
        self.dry_run = dry_run
        self._aborted = threading.Event()

    def abort(self) -> None:
        """Stop launching sessions. Workers waiting on the lock give up once they get it."""
        self._aborted.set()

    @property
    def aborted(self) -> bool:
        return self._aborted.is_set()

    def resolve_shell(self, context: ContainerContext) -> str:
        shell = self.cache.get(context.image)
        if shell:
            return shell

        result = self.prober.probe(context)
        if result.conclusive:
            self.cache.put(context.image, result.shell)
        return result.shell

    def dispatch(self, context: ContainerContext) -> bool:
        """Return True when a session ran and exited cleanly. Launch failures are logged, not raised."""
        if self.aborted:
            return False

        shell = self.resolve_shell(context)

        with self.execution_lock:
            if self.aborted:
                logger.debug("Not connecting to %s (%s): run aborted", context.container_name, context.short_task_id)
                return False
            return self._launch(context, shell)

    def _launch(self, context: ContainerContext, shell: str) -> bool:
        label = f"{context.service_name or context.cluster_name}/{context.short_task_id}/{context.container_name}"

        if self.dry_run:
            console.print(self.launcher.format_command(context, shell))
            return True

        print_info(f"\n🔌 Connecting to {label} with {shell}")
        logger.debug("Container image %s in cluster %s", context.image, context.cluster_arn)
        try:
            status = self.launcher.run_interactive(context, shell)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error("Failed to start session for %s: %s", label, e)
            return False
        finally:
            restore_terminal()

        if status != 0:
            logger.error("Session for %s exited with status %s", label, status)
            return False
        return True
