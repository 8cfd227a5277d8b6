"""On-disk layout shared by the allocator and the reclaimer."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from prealloc.core.errors import ConfigurationError

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB

RESERVED_DIR_NAME = ".preallocation"
RESERVED_DIR_MODE = 0o755

UNIT_CHUNK_SIZE = MIB
UNIT_CHUNK_COUNT = 1024
UNIT_SIZE = UNIT_CHUNK_SIZE * UNIT_CHUNK_COUNT

# Units at least this large count as "full" when reclaiming.
MIN_RECLAIM_SIZE = GIB - 128 * MIB


def reserved_dir(volume_path: os.PathLike | str) -> Path:
    return Path(volume_path) / RESERVED_DIR_NAME


def unit_name(timestamp_ns: int) -> str:
    """Lowercase hex of a nanosecond timestamp, e.g. ``17f0c3a9b2e4d000``."""
    return format(timestamp_ns, "x")


def ensure_reserved_dir(volume_path: os.PathLike | str) -> Path:
    """Return the reserved directory, creating it when absent.

    Raises:
        ConfigurationError: the path is taken by a non-directory or
            cannot be created.
    """
    directory = reserved_dir(volume_path)
    try:
        st = os.stat(directory)
    except FileNotFoundError:
        try:
            os.mkdir(directory, RESERVED_DIR_MODE)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot create preallocation directory {directory}: {exc}"
            ) from exc
        return directory
    except OSError as exc:
        raise ConfigurationError(f"Cannot inspect preallocation directory {directory}: {exc}") from exc

    if not stat.S_ISDIR(st.st_mode):
        raise ConfigurationError(f"Preallocation path {directory} exists but is not a directory")
    return directory


def require_reserved_dir(volume_path: os.PathLike | str) -> Path:
    """Return the reserved directory, which must already exist."""
    directory = reserved_dir(volume_path)
    try:
        st = os.stat(directory)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Preallocation directory {directory} not found") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot inspect preallocation directory {directory}: {exc}") from exc

    if not stat.S_ISDIR(st.st_mode):
        raise ConfigurationError(f"Preallocation path {directory} is not a directory")
    return directory


__all__ = [
    "KIB",
    "MIB",
    "GIB",
    "RESERVED_DIR_NAME",
    "RESERVED_DIR_MODE",
    "UNIT_CHUNK_SIZE",
    "UNIT_CHUNK_COUNT",
    "UNIT_SIZE",
    "MIN_RECLAIM_SIZE",
    "reserved_dir",
    "unit_name",
    "ensure_reserved_dir",
    "require_reserved_dir",
]
