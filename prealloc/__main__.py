"""Allow ``python -m prealloc``."""

from __future__ import annotations

from prealloc import run


if __name__ == "__main__":
    run()
