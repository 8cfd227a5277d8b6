"""Keep a volume at a target fill level with 1GB filler files."""

from __future__ import annotations

import sys
from importlib import metadata
from typing import Optional, Sequence

from .app.main import main

try:
    __version__ = metadata.version("prealloc")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Run the command line tool and exit with its status code."""
    sys.exit(main(list(argv) if argv is not None else None))


__all__ = ["__version__", "main", "run"]
