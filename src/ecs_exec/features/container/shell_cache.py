"""Persistent image -> shell cache so each image is only probed once."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import suppress
from pathlib import Path

logger = logging.getLogger(__name__)


class ShellCache:
    """JSON-file backed mapping of container image to shell path.

    Every ``put`` reloads the whole file, updates one key and atomically replaces the
    file, all under one lock, so concurrent workers cannot corrupt it. A missing or
    unreadable file behaves like an empty cache.

    With ``refresh`` set, entries left by earlier runs are ignored and only values
    stored during this run are returned.
    """

    def __init__(self, path: Path, refresh: bool = False) -> None:
        self.path = Path(path)
        self.refresh = refresh
        self._lock = threading.Lock()
        self._written: set[str] = set()

    def get(self, image: str) -> str | None:
        with self._lock:
            if self.refresh and image not in self._written:
                return None
            shell = self._load().get(image)

        if shell is None:
            logger.debug("Image %s not found in cache %s", image, self.path)
        else:
            logger.debug("Got shell %s for image %s from cache", shell, image)
        return shell

    def put(self, image: str, shell: str) -> None:
        with self._lock:
            entries = self._load()
            entries[image] = shell
            try:
                self._write(entries)
            except OSError as e:
                logger.error("Failed to write shell cache %s: %s", self.path, e)
                return
            self._written.add(image)

        logger.debug("Cached shell %s for image %s in %s", shell, image, self.path)

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Failed to read shell cache %s: %s", self.path, e)
            return {}

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Ignoring undecodable shell cache %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in data.items()
        ):
            logger.warning("Ignoring shell cache %s: expected a JSON object of strings", self.path)
            return {}

        return data

    def _write(self, entries: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(entries, tmp, indent=2, sort_keys=True)
                tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            with suppress(OSError):
                os.unlink(tmp_name)
            raise

