"""Component-tagged loggers under the ``prealloc`` namespace."""

from __future__ import annotations

import logging
from typing import Optional, Union

NAMESPACE = "prealloc"


class ComponentLogger(logging.LoggerAdapter):
    """Adapter that prefixes every message with ``[Component]``.

    The component defaults to the last dotted part of the logger name, so
    ``prealloc.storage.allocator`` logs as ``[allocator]``.
    """

    def __init__(self, logger: logging.Logger, component: Optional[str] = None) -> None:
        super().__init__(logger, {})
        self.component = component or logger.name.rsplit(".", 1)[-1]

    def process(self, msg, kwargs):
        return f"[{self.component}] {msg}", kwargs

    def getChild(self, suffix: str) -> "ComponentLogger":
        return ComponentLogger(self.logger.getChild(suffix), f"{self.component}.{suffix}")


LoggerLike = Union[logging.Logger, logging.LoggerAdapter, None]


def get_module_logger(name: Optional[str] = None) -> ComponentLogger:
    if not name or name == NAMESPACE:
        qualified = NAMESPACE
    elif name.startswith(NAMESPACE + "."):
        qualified = name
    else:
        qualified = f"{NAMESPACE}.{name}"
    return ComponentLogger(logging.getLogger(qualified))


def ensure_component_logger(logger: LoggerLike, *, fallback_name: str) -> ComponentLogger:
    """Use an injected logger if there is one, else the module logger for ``fallback_name``."""
    if isinstance(logger, ComponentLogger):
        return logger
    if isinstance(logger, logging.LoggerAdapter):
        logger = logger.logger
    if isinstance(logger, logging.Logger):
        return ComponentLogger(logger)
    return get_module_logger(fallback_name)


__all__ = ["ComponentLogger", "LoggerLike", "ensure_component_logger", "get_module_logger"]
