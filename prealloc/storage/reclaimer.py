"""Shrink path: remove one full-size filler unit from the reserved directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from prealloc.core.errors import StorageIOError
from prealloc.core.logging_utils import LoggerLike, ensure_component_logger
from prealloc.storage.layout import MIN_RECLAIM_SIZE, require_reserved_dir


class FillerReclaimer:
    """Deletes the lexicographically greatest qualifying unit.

    Names are hex timestamps, so the greatest name is usually the newest
    unit. Ordering is plain string comparison, never numeric.
    """

    def __init__(
        self,
        volume_path: os.PathLike | str,
        *,
        min_unit_bytes: int = MIN_RECLAIM_SIZE,
        logger: LoggerLike = None,
    ) -> None:
        self.volume_path = Path(volume_path)
        self.min_unit_bytes = min_unit_bytes
        self._logger = ensure_component_logger(logger, fallback_name=__name__)

    def candidates(self) -> list[str]:
        """Sorted names of regular files at least ``min_unit_bytes`` long."""
        return self._scan(require_reserved_dir(self.volume_path))

    def reclaim(self) -> Optional[Path]:
        """Delete one unit and return its path, or ``None`` if none qualify."""
        directory = require_reserved_dir(self.volume_path)
        names = self._scan(directory)
        if not names:
            self._logger.info("no files to delete")
            return None

        path = directory / names[-1]
        try:
            os.remove(path)
        except OSError as exc:
            raise StorageIOError(f"Cannot delete {path}: {exc}") from exc

        self._logger.debug("Deleted %s (%d candidates left)", path.name, len(names) - 1)
        return path

    def _scan(self, directory: Path) -> list[str]:
        names: list[str] = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if not entry.is_file(follow_symlinks=False):
                        continue
                    if entry.stat(follow_symlinks=False).st_size >= self.min_unit_bytes:
                        names.append(entry.name)
        except OSError as exc:
            raise StorageIOError(f"Cannot list {directory}: {exc}") from exc
        return sorted(names)


__all__ = ["FillerReclaimer"]
