"""
Scoped Logging

Logger adapter with a per-instance prefix stack. A ScopedLogger is created
for a single operation, so prefixes never leak between concurrent callers.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, MutableMapping, TYPE_CHECKING

if TYPE_CHECKING:
    from httpc.context import Context


ROOT_LOGGER_NAME = "httpc"


class ScopedLogger(logging.LoggerAdapter):
    """
    Logger adapter that prepends the pushed prefixes to every message.

    Usage:
        logger = ScopedLogger(logging.getLogger("httpc"))
        with logger.prefixed("send reqid:abc to url(http://x). "):
            logger.debug("Start")
    """

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None) -> None:
        super().__init__(logger, extra or {})
        self._prefixes: list[str] = []

    @property
    def prefix(self) -> str:
        return "".join(self._prefixes)

    def push_prefix(self, prefix: str) -> None:
        self._prefixes.append(prefix)

    def pop_prefix(self) -> str:
        """Remove and return the most recently pushed prefix."""
        if not self._prefixes:
            raise IndexError("pop_prefix called with no prefix pushed")
        return self._prefixes.pop()

    @contextmanager
    def prefixed(self, prefix: str) -> Iterator["ScopedLogger"]:
        """Push a prefix for the duration of the block."""
        self.push_prefix(prefix)
        try:
            yield self
        finally:
            self.pop_prefix()

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        if self.extra:
            kwargs.setdefault("extra", {}).update(self.extra)
        return f"{self.prefix}{msg}", kwargs


def from_context(ctx: "Context") -> ScopedLogger:
    """Create a fresh scoped logger from the context's logger."""
    return ScopedLogger(ctx.logger)
