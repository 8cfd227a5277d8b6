"""Grow path: write one filler unit into the reserved directory."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable, Optional

from prealloc.core.errors import StorageIOError
from prealloc.core.file_sync_utils import fsync_file
from prealloc.core.logging_utils import LoggerLike, ensure_component_logger
from prealloc.storage.layout import (
    UNIT_CHUNK_COUNT,
    UNIT_CHUNK_SIZE,
    ensure_reserved_dir,
    unit_name,
)

Clock = Callable[[], int]
RandomSource = Callable[[int], bytes]


class FillerAllocator:
    """Creates filler units of ``chunk_size * chunk_count`` bytes.

    Filenames come from ``clock`` (nanoseconds since the epoch), so calls must
    be serialized; two identical timestamps are reported as an error instead
    of overwriting the earlier unit.
    """

    def __init__(
        self,
        volume_path: os.PathLike | str,
        *,
        random_fill: bool = False,
        clock: Optional[Clock] = None,
        random_source: Optional[RandomSource] = None,
        chunk_size: int = UNIT_CHUNK_SIZE,
        chunk_count: int = UNIT_CHUNK_COUNT,
        logger: LoggerLike = None,
    ) -> None:
        if chunk_size <= 0 or chunk_count <= 0:
            raise ValueError("chunk_size and chunk_count must be positive")
        self.volume_path = Path(volume_path)
        self.random_fill = random_fill
        self.chunk_size = chunk_size
        self.chunk_count = chunk_count
        self._clock = clock or time.time_ns
        self._random_source = random_source or os.urandom
        self._zero_chunk = bytes(chunk_size)
        self._logger = ensure_component_logger(logger, fallback_name=__name__)

    @property
    def unit_size(self) -> int:
        return self.chunk_size * self.chunk_count

    def allocate(self) -> Path:
        """Write and fsync one new unit, returning its path.

        Raises:
            ConfigurationError: reserved directory unusable.
            StorageIOError: create, write, random generation or sync failed.
        """
        directory = ensure_reserved_dir(self.volume_path)
        path = directory / unit_name(self._clock())

        try:
            handle = open(path, "xb")
        except FileExistsError as exc:
            raise StorageIOError(f"Filler unit {path} already exists (timestamp collision)") from exc
        except OSError as exc:
            raise StorageIOError(f"Cannot create filler unit {path}: {exc}") from exc

        with handle:
            for _ in range(self.chunk_count):
                data = self._next_chunk()
                try:
                    handle.write(data)
                except OSError as exc:
                    raise StorageIOError(f"Write to {path} failed: {exc}") from exc
            try:
                fsync_file(handle)
            except OSError as exc:
                raise StorageIOError(f"Sync of {path} failed: {exc}") from exc

        self._logger.debug("Allocated %s (%d bytes, random=%s)", path.name, self.unit_size, self.random_fill)
        return path

    def _next_chunk(self) -> bytes:
        if not self.random_fill:
            return self._zero_chunk
        try:
            data = self._random_source(self.chunk_size)
        except (OSError, NotImplementedError) as exc:
            raise StorageIOError(f"Random data generation failed: {exc}") from exc
        if len(data) != self.chunk_size:
            raise StorageIOError(
                f"Random source returned {len(data)} bytes, expected {self.chunk_size}"
            )
        return data


__all__ = ["FillerAllocator", "Clock", "RandomSource"]
