"""Reader for flat ``key = value`` configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from prealloc.core.errors import ConfigurationError
from prealloc.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)

TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
FALSE_WORDS = frozenset({"false", "no", "off", "0"})
NULL_WORDS = frozenset({"", "none", "null"})


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _entries(lines: Iterable[str]) -> Iterator[tuple[int, str, str]]:
    """Yield ``(line_number, key, raw_value)`` for each assignment line."""
    for line_num, line in enumerate(lines, 1):
        text = line.split("#", 1)[0].strip()
        if not text:
            continue
        key, sep, value = text.partition("=")
        if not sep:
            logger.warning("Ignoring line %d without '=': %s", line_num, text)
            continue
        yield line_num, key.strip(), _unquote(value.strip())


class ConfigLoader:
    """Loads ``key = value`` files into a dict.

    Keys with a non-``None`` default are converted to the default's type. A
    ``None`` default marks an optional string. Keys without a default are
    guessed (bool, int, float, then str). In strict mode unknown keys are
    dropped and a value that does not fit its type raises
    :class:`ConfigurationError`; otherwise the default is kept.
    """

    @classmethod
    def load(
        cls,
        config_path: Path,
        defaults: Optional[dict[str, Any]] = None,
        strict: bool = False,
    ) -> dict[str, Any]:
        config = dict(defaults or {})

        if not config_path.exists():
            logger.log(
                logging.DEBUG if defaults else logging.WARNING,
                "Config file not found at %s, using defaults", config_path,
            )
            return config

        with open(config_path, encoding="utf-8") as handle:
            for line_num, key, raw in _entries(handle):
                known = defaults is not None and key in defaults
                if strict and not known:
                    logger.warning("Ignoring unknown key '%s' on line %d", key, line_num)
                    continue
                if not known:
                    config[key] = cls._guess(raw)
                    continue
                try:
                    config[key] = cls._coerce(raw, defaults[key])
                except ValueError as exc:
                    if strict:
                        raise ConfigurationError(
                            f"{config_path}:{line_num}: invalid value for '{key}': {exc}"
                        ) from exc
                    logger.warning(
                        "Line %d: cannot use %r for '%s' (%s), keeping %r",
                        line_num, raw, key, exc, defaults[key],
                    )

        logger.info("Loaded config from %s (%d values)", config_path, len(config))
        return config

    @staticmethod
    def _guess(raw: str) -> Any:
        lowered = raw.lower()
        if lowered in NULL_WORDS:
            return None
        if lowered in TRUE_WORDS - {"1"}:
            return True
        if lowered in FALSE_WORDS - {"0"}:
            return False
        for convert in (int, float):
            try:
                return convert(raw)
            except ValueError:
                pass
        return raw

    @staticmethod
    def _coerce(raw: str, default: Any) -> Any:
        """Convert ``raw`` to the type of ``default``; ValueError if it does not fit."""
        if default is None:
            return None if raw.lower() in NULL_WORDS else raw
        if isinstance(default, bool):
            lowered = raw.lower()
            if lowered in TRUE_WORDS:
                return True
            if lowered in FALSE_WORDS:
                return False
            raise ValueError(f"expected true/false, got {raw!r}")
        if isinstance(default, int):
            return int(raw, 0)  # 0x.., 0o.., 0b.. accepted
        if isinstance(default, float):
            return float(raw)
        if isinstance(default, Path):
            return Path(raw) if raw else default
        return raw


__all__ = ["ConfigLoader", "TRUE_WORDS", "FALSE_WORDS"]
