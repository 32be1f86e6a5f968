"""
Execution Context

Carries what a single call needs from its caller:
- Cancellation signal (propagated from parent to children)
- Deadline (monotonic clock)
- Logger
- HTTP client (injected, falls back to the process default)
- Free-form values

Contexts are immutable from the caller's point of view: every with_* method
returns a derived child and leaves the parent untouched.
"""

from __future__ import annotations

import copy
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TYPE_CHECKING

from httpc.errors import CancelledException, DeadlineExceededException, TransportException
from httpc.log import ROOT_LOGGER_NAME

if TYPE_CHECKING:
    from httpc.http import HttpClient


DoneCallback = Callable[[TransportException], None]


class _CancelSignal:
    """
    One-shot cancellation signal linked to an optional parent signal.

    A child reads its parent's state on demand and only subscribes to the
    parent while it has callbacks of its own, so a long-lived parent never
    holds on to children that finished without being cancelled.
    """

    def __init__(self, parent: Optional["_CancelSignal"] = None) -> None:
        self._lock = threading.Lock()
        self._err: Optional[TransportException] = None
        self._callbacks: list[DoneCallback] = []
        self._parent = parent

    @property
    def err(self) -> Optional[TransportException]:
        parent = self._parent
        if self._err is None and parent is not None:
            parent_err = parent.err
            if parent_err is not None:
                self.fire(parent_err)
        return self._err

    def fire(self, err: TransportException) -> None:
        with self._lock:
            if self._err is not None:
                return
            self._err = err
            callbacks, self._callbacks = self._callbacks, []
            parent, self._parent = self._parent, None
        if parent is not None and callbacks:
            parent.remove_callback(self.fire)
        for callback in callbacks:
            callback(err)

    def add_callback(self, callback: DoneCallback) -> None:
        err = self.err
        parent = None
        if err is None:
            with self._lock:
                err = self._err
                if err is None:
                    if not self._callbacks:
                        parent = self._parent
                    self._callbacks.append(callback)
        if err is not None:
            callback(err)
        elif parent is not None:
            parent.add_callback(self.fire)

    def remove_callback(self, callback: DoneCallback) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                return
            parent = self._parent if not self._callbacks else None
        if parent is not None:
            parent.remove_callback(self.fire)


@dataclass
class Context:
    """
    Execution context for a call.

    Usage:
        ctx = Context.background().with_timeout(5.0)
        send(ctx, "http://example.com/items", with_bytes_response(slot))

        with Context.background().with_cancel() as ctx:
            threading.Timer(1.0, ctx.cancel).start()
            send(ctx, url)
    """

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(ROOT_LOGGER_NAME))
    http: Optional["HttpClient"] = None
    deadline: Optional[float] = None
    values: dict[str, Any] = field(default_factory=dict)
    _signal: _CancelSignal = field(default_factory=_CancelSignal, repr=False, compare=False)

    @classmethod
    def background(cls) -> "Context":
        """Create a root context: never cancelled, no deadline."""
        return cls()

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    def _derive(self, **changes: Any) -> "Context":
        child = copy.copy(self)
        child.values = dict(self.values)
        for key, value in changes.items():
            setattr(child, key, value)
        return child

    def with_cancel(self) -> "Context":
        """Derive a child that can be cancelled independently of its parent."""
        return self._derive(_signal=_CancelSignal(parent=self._signal))

    def with_deadline(self, deadline: float) -> "Context":
        """Derive a cancellable child expiring at a time.monotonic() value."""
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        return self._derive(deadline=deadline, _signal=_CancelSignal(parent=self._signal))

    def with_timeout(self, seconds: float) -> "Context":
        """Derive a cancellable child expiring after seconds."""
        return self.with_deadline(time.monotonic() + seconds)

    def with_logger(self, logger: logging.Logger) -> "Context":
        return self._derive(logger=logger)

    def with_http(self, client: "HttpClient") -> "Context":
        return self._derive(http=client)

    def with_value(self, key: str, value: Any) -> "Context":
        child = self._derive()
        child.values[key] = value
        return child

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        self._signal.fire(CancelledException())

    def err(self) -> Optional[TransportException]:
        """Return why the context is done, or None while it is still live."""
        err = self._signal.err
        if err is not None:
            return err
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self._signal.fire(DeadlineExceededException())
            return self._signal.err
        return None

    def done(self) -> bool:
        return self.err() is not None

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline (never negative), or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def add_done_callback(self, callback: DoneCallback) -> None:
        """
        Call callback(err) on cancellation.

        Called immediately when already cancelled. Deadline expiry is not
        signalled through callbacks; use remaining() to bound waits.
        """
        self._signal.add_callback(callback)

    def remove_done_callback(self, callback: DoneCallback) -> None:
        self._signal.remove_callback(callback)

    def value(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, *args) -> None:
        self.cancel()
