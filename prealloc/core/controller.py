"""Capacity convergence: grow or shrink the reserved directory toward a target.

The controller reads current usage once, works out how many 1 GiB units must be
added or removed, and then performs that many operations one after another.
Each operation is timed; the first one slower than the configured threshold
ends the run early without raising. Errors from the allocator, reclaimer or
inspector are not caught here.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from prealloc.core.config import PreallocConfig
from prealloc.core.logging_utils import LoggerLike, ensure_component_logger
from prealloc.storage.allocator import FillerAllocator
from prealloc.storage.reclaimer import FillerReclaimer
from prealloc.storage.volume import VolumeInspector

Timer = Callable[[], float]


class Direction(str, Enum):
    NONE = "none"
    GROW = "grow"
    SHRINK = "shrink"


@dataclass(slots=True)
class ConvergenceResult:
    direction: Direction
    used_gb: int
    target_gb: int
    requested: int = 0
    completed: int = 0
    skipped: int = 0
    aborted_slow: bool = False
    durations: list[float] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return not self.aborted_slow and self.completed == self.requested


class ConvergenceController:
    """Moves volume usage toward the configured target, one 1 GiB unit at a time."""

    def __init__(
        self,
        config: PreallocConfig,
        *,
        inspector: Optional[VolumeInspector] = None,
        allocator: Optional[FillerAllocator] = None,
        reclaimer: Optional[FillerReclaimer] = None,
        timer: Optional[Timer] = None,
        logger: LoggerLike = None,
    ) -> None:
        self.config = config
        self.logger = ensure_component_logger(logger, fallback_name="Controller")
        self.inspector = inspector or VolumeInspector(logger=self.logger.getChild("Volume"))
        self.allocator = allocator or FillerAllocator(
            config.volume_path,
            random_fill=config.random_fill,
            logger=self.logger.getChild("Allocator"),
        )
        self.reclaimer = reclaimer or FillerReclaimer(
            config.volume_path,
            logger=self.logger.getChild("Reclaimer"),
        )
        self._timer = timer or time.monotonic

    def plan(self, used_gb: int) -> int:
        """Signed unit count: positive to allocate, negative to delete."""
        return self.config.target_gb - used_gb

    def run(self) -> ConvergenceResult:
        used_gb = self.inspector.used_gb(self.config.volume_path)
        delta = self.plan(used_gb)
        self.logger.info(
            "Volume %s: used=%d GB target=%d GB",
            self.config.volume_path,
            used_gb,
            self.config.target_gb,
        )

        if delta > 0:
            result = ConvergenceResult(Direction.GROW, used_gb, self.config.target_gb, requested=delta)
            self.logger.info("Try to allocate %d files of 1GB", delta)
            operation = self._grow_once
        elif delta < 0:
            result = ConvergenceResult(Direction.SHRINK, used_gb, self.config.target_gb, requested=-delta)
            self.logger.info("Try to delete %d files of 1GB", -delta)
            operation = self._shrink_once
        else:
            self.logger.info("Disk usage already at target, nothing to do")
            return ConvergenceResult(Direction.NONE, used_gb, self.config.target_gb)

        if self.config.dry_run:
            self.logger.info("Dry run: skipping %d %s operations", result.requested, result.direction.value)
            return result

        self._execute(result, operation)
        return result

    def _execute(self, result: ConvergenceResult, operation: Callable[[ConvergenceResult], None]) -> None:
        threshold = self.config.slow_threshold_s
        for index in range(1, result.requested + 1):
            started = self._timer()
            operation(result)
            elapsed = self._timer() - started

            result.completed += 1
            result.durations.append(elapsed)
            self.logger.info("File #%d: %.3fs", index, elapsed)

            if elapsed > threshold:
                result.aborted_slow = True
                self.logger.warning(
                    "Disk too slow: unit #%d took %.1fs (limit %.1fs), stopping after %d of %d",
                    index,
                    elapsed,
                    threshold,
                    result.completed,
                    result.requested,
                )
                return

    def _grow_once(self, result: ConvergenceResult) -> None:
        self.allocator.allocate()

    def _shrink_once(self, result: ConvergenceResult) -> None:
        if self.reclaimer.reclaim() is None:
            result.skipped += 1


__all__ = ["ConvergenceController", "ConvergenceResult", "Direction", "Timer"]
