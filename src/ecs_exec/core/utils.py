"""Utility functions for ecs-exec."""

from __future__ import annotations

import atexit
import sys
from collections.abc import Iterator, Sequence
from contextlib import suppress
from typing import TYPE_CHECKING, Literal, TypeVar

from rich.console import Console

# Try to import Unix-specific terminal control modules
try:
    import termios

    HAS_TERMIOS = True
    # Terminal settings from before any interactive session touched the tty
    _original_terminal_settings = None
    if sys.stdin.isatty():
        _original_terminal_settings = termios.tcgetattr(sys.stdin.fileno())
except ImportError:
    HAS_TERMIOS = False

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient

T = TypeVar("T")

console = Console()


def restore_terminal() -> None:
    """Put the terminal back the way it was at startup (session-manager-plugin leaves it raw on crashes)."""
    if HAS_TERMIOS and _original_terminal_settings and sys.stdin.isatty():
        with suppress(Exception):
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, _original_terminal_settings)


atexit.register(restore_terminal)


def extract_name_from_arn(arn: str) -> str:
    """Extract resource name from AWS ARN."""
    return arn.split("/")[-1]


def print_success(message: str) -> None:
    console.print(f"✅ {message}", style="green")


def print_warning(message: str) -> None:
    console.print(f"⚠️ {message}", style="yellow")


def print_info(message: str) -> None:
    console.print(message, style="blue")


def iter_aws_pages(
    client: ECSClient,
    operation_name: Literal["list_clusters", "list_tasks"],
    result_key: str,
    **kwargs: str,
) -> Iterator[list[str]]:
    """Yield each page of a list operation lazily, so callers can act on a page before the next is fetched."""
    paginator = client.get_paginator(operation_name)  # type: ignore[no-matching-overload]
    for page in paginator.paginate(**kwargs):
        yield list(page.get(result_key, []))


def paginate_aws_list(
    client: ECSClient,
    operation_name: Literal["list_clusters", "list_tasks"],
    result_key: str,
    **kwargs: str,
) -> list[str]:
    results: list[str] = []
    for page in iter_aws_pages(client, operation_name, result_key, **kwargs):
        results.extend(page)

    return results


def batch_items(items: Sequence[T], batch_size: int) -> Iterator[list[T]]:
    """Split items into consecutive batches of at most batch_size."""
    for start in range(0, len(items), batch_size):
        yield list(items[start : start + batch_size])
