"""Tests for Context cancellation, deadlines and parent propagation."""

import threading
import time
from unittest.mock import patch

from idp_client import (
    CancellationError,
    Context,
    ContextCancelledError,
    DeadlineExceededError,
)

# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


def test_background_is_never_done():
    ctx = Context.background()
    assert not ctx.done()
    assert ctx.err() is None
    assert ctx.remaining() is None


def test_cancel_sets_cancelled_error():
    ctx = Context.with_cancel()
    ctx.cancel()
    assert ctx.done()
    assert isinstance(ctx.err(), ContextCancelledError)


def test_cancel_is_idempotent():
    """A second cancel keeps the original reason."""
    ctx = Context.with_timeout(0.0)
    assert isinstance(ctx.err(), DeadlineExceededError)
    ctx.cancel()
    assert isinstance(ctx.err(), DeadlineExceededError)


def test_err_returns_fresh_instances():
    """Concurrent callers can raise the error without sharing tracebacks."""
    ctx = Context.with_cancel()
    ctx.cancel()
    assert ctx.err() is not ctx.err()


def test_context_manager_cancels_on_exit():
    with Context.with_cancel() as ctx:
        assert not ctx.done()
    assert isinstance(ctx.err(), ContextCancelledError)


def test_cancel_from_another_thread():
    ctx = Context.with_cancel()
    worker = threading.Thread(target=ctx.cancel)
    worker.start()
    worker.join()
    assert ctx.done()


# ---------------------------------------------------------------------------
# Deadlines
# ---------------------------------------------------------------------------


def test_expired_timeout_is_deadline_exceeded():
    ctx = Context.with_timeout(0.0)
    err = ctx.err()
    assert isinstance(err, DeadlineExceededError)
    assert isinstance(err, CancellationError)


def test_remaining_counts_down():
    ctx = Context.with_timeout(60.0)
    remaining = ctx.remaining()
    assert remaining is not None
    assert 0.0 < remaining <= 60.0
    assert not ctx.done()


@patch("idp_client.context.time")
def test_deadline_passes(mock_time):
    """The context turns done once the monotonic clock reaches the deadline."""
    mock_time.monotonic.side_effect = [
        100.0,  # with_timeout: now
        105.0,  # first err(): before deadline
        110.0,  # second err(): at deadline
    ]
    ctx = Context.with_timeout(10.0)

    assert ctx.err() is None
    assert isinstance(ctx.err(), DeadlineExceededError)


def test_remaining_never_negative():
    ctx = Context.with_deadline(time.monotonic() - 5.0)
    assert ctx.remaining() == 0.0


# ---------------------------------------------------------------------------
# Parent propagation
# ---------------------------------------------------------------------------


def test_child_observes_parent_cancel():
    parent = Context.with_cancel()
    child = Context.with_timeout(60.0, parent=parent)
    parent.cancel()
    assert isinstance(child.err(), ContextCancelledError)


def test_child_cancel_does_not_affect_parent():
    parent = Context.with_cancel()
    child = Context.with_cancel(parent=parent)
    child.cancel()
    assert child.done()
    assert not parent.done()


def test_child_inherits_earlier_parent_deadline():
    parent = Context.with_deadline(1000.0)
    child = Context.with_deadline(2000.0, parent=parent)
    assert child.deadline == 1000.0


def test_child_keeps_its_own_earlier_deadline():
    parent = Context.with_deadline(2000.0)
    child = Context.with_deadline(1000.0, parent=parent)
    assert child.deadline == 1000.0
