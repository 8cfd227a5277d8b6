"""Typed run configuration for prealloc."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from prealloc.core.errors import ConfigurationError

DEFAULT_TARGET_GB = 256
DEFAULT_VOLUME_PATH = Path("/mnt")
DEFAULT_SLOW_THRESHOLD_S = 10 * 60.0


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise TypeError(f"expected true/false, got {value!r}")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    return int(value)


# config-file key -> (field name, converter)
_FILE_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "size": ("target_gb", _as_int),
    "path": ("volume_path", Path),
    "random": ("random_fill", _as_bool),
    "slow_threshold": ("slow_threshold_s", float),
    "dry_run": ("dry_run", _as_bool),
    "log_level": ("log_level", lambda value: str(value).lower()),
    "log_file": ("log_file", Path),
}


@dataclass(slots=True)
class PreallocConfig:
    """Everything one convergence run needs, passed explicitly to the controller."""

    target_gb: int = DEFAULT_TARGET_GB
    volume_path: Path = field(default_factory=lambda: DEFAULT_VOLUME_PATH)
    random_fill: bool = False
    slow_threshold_s: float = DEFAULT_SLOW_THRESHOLD_S
    dry_run: bool = False

    # Logging
    log_level: str = "info"
    log_file: Optional[Path] = None

    @classmethod
    def file_defaults(cls) -> dict[str, Any]:
        """Defaults keyed by their config-file names."""
        defaults = cls()
        return {
            "size": defaults.target_gb,
            "path": defaults.volume_path,
            "random": defaults.random_fill,
            "slow_threshold": defaults.slow_threshold_s,
            "dry_run": defaults.dry_run,
            "log_level": defaults.log_level,
            "log_file": None,
        }

    @classmethod
    def from_sources(
        cls, args: Any = None, file_values: Optional[Mapping[str, Any]] = None
    ) -> "PreallocConfig":
        """Build config from a config-file mapping, then apply CLI overrides."""
        config = cls()

        if file_values:
            config = config._apply_file_values(file_values)

        if args is not None:
            config = config._apply_args_override(args)

        config.validate()
        return config

    def _apply_file_values(self, values: Mapping[str, Any]) -> "PreallocConfig":
        updates: dict[str, Any] = {}
        for key, (field_name, convert) in _FILE_FIELDS.items():
            value = values.get(key)
            if value is None or value == "":
                continue
            try:
                updates[field_name] = convert(value)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"Invalid config value for '{key}': {value!r}") from exc
        return replace(self, **updates)

    def _apply_args_override(self, args: Any) -> "PreallocConfig":
        """Apply CLI argument overrides; ``None`` means "not given on the CLI"."""
        values = asdict(self)

        arg_mappings = {
            "size": "target_gb",
            "path": "volume_path",
            "random": "random_fill",
            "slow_threshold": "slow_threshold_s",
            "dry_run": "dry_run",
            "log_level": "log_level",
            "log_file": "log_file",
        }

        for arg_name, config_key in arg_mappings.items():
            val = getattr(args, arg_name, None)
            if val is not None:
                values[config_key] = val

        values["volume_path"] = Path(values["volume_path"])
        return PreallocConfig(**values)

    def validate(self) -> None:
        if self.target_gb < 0:
            raise ConfigurationError(f"Target size must be >= 0 GB, got {self.target_gb}")
        if not (math.isfinite(self.slow_threshold_s) and self.slow_threshold_s > 0):
            raise ConfigurationError(
                f"Slow-disk threshold must be positive, got {self.slow_threshold_s}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = ["PreallocConfig", "DEFAULT_TARGET_GB", "DEFAULT_VOLUME_PATH", "DEFAULT_SLOW_THRESHOLD_S"]
