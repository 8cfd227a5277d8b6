"""Command line entry point: parse options, run one convergence pass, exit."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from prealloc.cli.common import add_common_cli_arguments, non_negative_int, positive_float
from prealloc.core.config import DEFAULT_TARGET_GB, DEFAULT_VOLUME_PATH, PreallocConfig
from prealloc.core.config_loader import ConfigLoader
from prealloc.core.controller import ConvergenceController
from prealloc.core.errors import ConfigurationError, PreallocError
from prealloc.core.logging_config import configure_logging
from prealloc.core.logging_utils import get_module_logger

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

logger = get_module_logger("Main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prealloc",
        description="Fill or drain a volume with 1GB filler files until it reaches a target usage",
    )

    parser.add_argument(
        "--size",
        type=non_negative_int,
        default=None,
        help=f"Minimum disk usage in GB (default: {DEFAULT_TARGET_GB})",
    )

    parser.add_argument(
        "--path",
        type=str,
        default=None,
        help=f"Path to disk (default: {DEFAULT_VOLUME_PATH})",
    )

    parser.add_argument(
        "--random",
        action="store_true",
        default=None,
        help="Allocate with random data instead of zeros",
    )

    parser.add_argument(
        "--slow-threshold",
        dest="slow_threshold",
        type=positive_float,
        default=None,
        help="Stop when a single 1GB file takes longer than this many seconds (default: 600)",
    )

    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        default=None,
        help="Report what would be allocated or deleted without touching the disk",
    )

    add_common_cli_arguments(parser)
    return parser


def load_config(args: argparse.Namespace) -> PreallocConfig:
    """Merge defaults, the optional ``--config`` file and CLI flags."""
    file_values = None
    if args.config is not None:
        if not args.config.is_file():
            raise ConfigurationError(f"Config file {args.config} not found")
        try:
            file_values = ConfigLoader.load(args.config, PreallocConfig.file_defaults(), strict=True)
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Cannot read config file {args.config}: {exc}") from exc
    return PreallocConfig.from_sources(args, file_values)


def _setup_logging(config: PreallocConfig) -> None:
    try:
        configure_logging(config.log_level, force=True, log_file=config.log_file)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot configure logging: {exc}") from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        config = load_config(args)
        _setup_logging(config)
    except ConfigurationError as exc:
        configure_logging("info", force=True)
        logger.error("%s", exc)
        return EXIT_FAILURE

    try:
        result = ConvergenceController(config).run()
    except PreallocError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return EXIT_INTERRUPTED

    if result.aborted_slow:
        logger.info(
            "Stopped early: %d of %d %s operations completed",
            result.completed,
            result.requested,
            result.direction.value,
        )
    return EXIT_OK


__all__ = ["build_parser", "load_config", "main", "EXIT_OK", "EXIT_FAILURE", "EXIT_INTERRUPTED"]
