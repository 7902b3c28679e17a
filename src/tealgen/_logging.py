"""Package logging.

Usage::

    from ._logging import scoped_logger

    log = scoped_logger("walker")
    log.debug("processed type %s", name, extra={"module_name": module_name})

tealgen never configures handlers itself; applications attach their own to
the ``tealgen`` logger.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

__all__ = ["logger", "scoped_logger"]

# Single logger for all of tealgen
logger = logging.getLogger("tealgen")
logger.addHandler(logging.NullHandler())


class _ScopedLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges extra attributes with scope."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra: dict[str, Any] = dict(self.extra) if self.extra else {}
        if "extra" in kwargs:
            extra.update(kwargs["extra"])
        kwargs["extra"] = extra
        return msg, kwargs


def scoped_logger(scope: str) -> logging.LoggerAdapter:
    """Create a logger adapter that tags every record with ``scope``."""
    return _ScopedLoggerAdapter(logger, {"scope": scope})
