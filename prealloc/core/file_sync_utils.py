"""Helpers for forcing written data down to durable storage.

Unlike best-effort sync helpers, these raise on failure: a unit only counts
once the kernel has acknowledged the flush.
"""

from __future__ import annotations

import os
from typing import BinaryIO


def fsync_file(file_obj: BinaryIO) -> None:
    """Flush Python's buffer for ``file_obj`` and fsync its descriptor.

    Raises:
        OSError: if either the flush or the fsync fails.
    """
    file_obj.flush()
    os.fsync(file_obj.fileno())


__all__ = ["fsync_file"]
