"""Exception hierarchy for prealloc.

Every fatal condition derives from :class:`PreallocError` so the top-level
handler in :mod:`prealloc.app.main` can log it and pick an exit status.
Non-fatal outcomes (slow disk, nothing to reclaim) are reported through return
values instead.
"""

from __future__ import annotations


class PreallocError(RuntimeError):
    pass


class ConfigurationError(PreallocError):
    """Reserved directory is unusable or a configuration value is invalid."""


class StorageIOError(PreallocError):
    """Creating, writing, syncing, listing or deleting a filler unit failed."""


class StatisticsError(PreallocError):
    """Volume statistics could not be read."""


__all__ = [
    "PreallocError",
    "ConfigurationError",
    "StorageIOError",
    "StatisticsError",
]
