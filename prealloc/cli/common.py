from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path


LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def add_common_cli_arguments(parser: argparse.ArgumentParser) -> None:
    """Logging and config-file options shared by every prealloc entry point.

    Defaults are ``None`` so that values from ``--config`` survive unless the
    flag is given explicitly.
    """
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional key=value configuration file supplying defaults",
    )

    parser.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS.keys()),
        default=None,
        help="Logging verbosity (default: info)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional path for a rotating log file",
    )


def _bounded_number(value: str, typ: type, name: str, *, allow_zero: bool):
    try:
        parsed = typ(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Value must be a {name}") from exc
    if isinstance(parsed, float) and not math.isfinite(parsed):
        raise argparse.ArgumentTypeError(f"Value must be a finite {name}")
    if parsed < 0 or (parsed == 0 and not allow_zero):
        raise argparse.ArgumentTypeError(
            "Value must be non-negative" if allow_zero else "Value must be positive"
        )
    return parsed


def non_negative_int(value: str) -> int:
    return _bounded_number(value, int, "integer", allow_zero=True)


def positive_float(value: str) -> float:
    return _bounded_number(value, float, "number", allow_zero=False)


__all__ = ["LOG_LEVELS", "add_common_cli_arguments", "non_negative_int", "positive_float"]
