"""Runtime configuration for ecs-exec."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import environ
from pathlib import Path

CACHE_FILE_NAME = "ecs-exec.json"
DEFAULT_MAX_WORKERS = 16


def default_cache_path() -> Path:
    """Cache file location, honouring XDG_CACHE_HOME."""
    cache_home = environ.get("XDG_CACHE_HOME")
    base = Path(cache_home) if cache_home else Path.home() / ".cache"
    return base / CACHE_FILE_NAME


@dataclass(frozen=True)
class ExecConfig:
    service_name: str = ""
    require_healthy: bool = False
    refresh_cache: bool = False
    cache_path: Path = field(default_factory=default_cache_path)
    max_workers: int = DEFAULT_MAX_WORKERS
    profile: str | None = None
    region: str | None = None
    dry_run: bool = False
    verbose: bool = False
