"""Cancellable, deadline-bearing execution context for API calls.

A :class:`Context` is passed to every outbound call. The dispatcher checks it
before sending, caps the transport timeout by the remaining time, and reports
the context's termination reason in place of the transport error when the
context is the root cause.
"""

from __future__ import annotations

import threading
import time

from .errors import CancellationError, ContextCancelledError, DeadlineExceededError


class Context:
    """Cancellation signal with an optional deadline and parent.

    Thread-safe. A child context is done as soon as its parent is done, and
    inherits the earlier of the two deadlines.
    """

    def __init__(
        self,
        deadline: float | None = None,
        parent: Context | None = None,
    ):
        """Initialize the context.

        Args:
            deadline: Absolute :func:`time.monotonic` value after which the
                context is done, or None for no deadline.
            parent: Optional parent context whose termination propagates.
        """
        if parent is not None and parent.deadline is not None:
            deadline = (
                parent.deadline if deadline is None else min(deadline, parent.deadline)
            )
        self.deadline = deadline
        self._parent = parent
        self._lock = threading.Lock()
        self._reason: type[CancellationError] | None = None

    @classmethod
    def background(cls) -> Context:
        """Return a context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_cancel(cls, parent: Context | None = None) -> Context:
        return cls(parent=parent)

    @classmethod
    def with_deadline(cls, deadline: float, parent: Context | None = None) -> Context:
        return cls(deadline=deadline, parent=parent)

    @classmethod
    def with_timeout(cls, seconds: float, parent: Context | None = None) -> Context:
        """Return a context that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, parent=parent)

    def cancel(self) -> None:
        """Cancel the context. Later calls have no effect."""
        with self._lock:
            if self._reason is None:
                self._reason = ContextCancelledError

    def err(self) -> CancellationError | None:
        """Return the termination reason, or None while the context is live.

        Each call returns a fresh exception instance so that concurrent
        callers can raise it independently.
        """
        reason = self._termination_reason()
        return reason() if reason is not None else None

    def _termination_reason(self) -> type[CancellationError] | None:
        with self._lock:
            if self._reason is None:
                if self._parent is not None:
                    self._reason = self._parent._termination_reason()
                if (
                    self._reason is None
                    and self.deadline is not None
                    and time.monotonic() >= self.deadline
                ):
                    self._reason = DeadlineExceededError
            return self._reason

    def done(self) -> bool:
        return self.err() is not None

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is none."""
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def __enter__(self) -> Context:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cancel()
