# tests/test_cancellation.py
"""Tests for cancellation tokens."""

from __future__ import annotations

import threading

from pow_puzzle.core.cancellation import CancellationToken


def test_fresh_token_is_not_cancelled() -> None:
    token = CancellationToken()
    assert not token.is_cancelled()
    assert token.cause is None


def test_first_cause_wins() -> None:
    """Later cancellations keep the original cause."""
    token = CancellationToken()
    token.cancel("first")
    token.cancel("second")
    assert token.is_cancelled()
    assert token.cause == "first"


def test_timeout_sets_cause() -> None:
    token = CancellationToken.with_timeout(0)
    assert token.is_cancelled()
    assert isinstance(token.cause, TimeoutError)


def test_future_deadline() -> None:
    assert not CancellationToken.with_timeout(3600).is_cancelled()


def test_cancel_from_another_thread() -> None:
    """Tokens can be cancelled while another thread polls them."""
    token = CancellationToken()
    worker = threading.Thread(target=token.cancel, args=("worker",))
    worker.start()
    worker.join()
    assert token.is_cancelled()
    assert token.cause == "worker"
