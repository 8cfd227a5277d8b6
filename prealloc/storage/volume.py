"""Live usage statistics for the target volume."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from prealloc.core.errors import StatisticsError
from prealloc.core.logging_utils import LoggerLike, ensure_component_logger
from prealloc.storage.layout import GIB

StatFn = Callable[[str], Any]


@dataclass(frozen=True, slots=True)
class VolumeUsage:
    path: Path
    total_bytes: int
    free_bytes: int

    @property
    def used_bytes(self) -> int:
        return max(0, self.total_bytes - self.free_bytes)

    @property
    def used_gb(self) -> int:
        return self.used_bytes // GIB


class VolumeInspector:
    """Reads total and free space of a mounted volume.

    ``stat_fn`` must return an object with ``f_blocks``, ``f_bfree`` and
    ``f_frsize`` (or ``f_bsize``) attributes, like :func:`os.statvfs`.
    Results are never cached.
    """

    def __init__(self, stat_fn: Optional[StatFn] = None, *, logger: LoggerLike = None) -> None:
        self._stat_fn = stat_fn or os.statvfs
        self._logger = ensure_component_logger(logger, fallback_name=__name__)

    def query(self, path: os.PathLike | str) -> VolumeUsage:
        try:
            st = self._stat_fn(str(path))
        except OSError as exc:
            raise StatisticsError(f"Cannot read volume statistics for {path}: {exc}") from exc

        block_size = getattr(st, "f_frsize", 0) or st.f_bsize
        usage = VolumeUsage(
            path=Path(path),
            total_bytes=st.f_blocks * block_size,
            free_bytes=st.f_bfree * block_size,
        )
        self._logger.debug(
            "Volume %s: total=%d free=%d used=%d GB",
            usage.path,
            usage.total_bytes,
            usage.free_bytes,
            usage.used_gb,
        )
        return usage

    def used_gb(self, path: os.PathLike | str) -> int:
        return self.query(path).used_gb


__all__ = ["VolumeInspector", "VolumeUsage", "StatFn"]
