from __future__ import annotations

from types import SimpleNamespace

from services.deadline import Deadline


def test_unbounded_deadline_never_expires() -> None:
    deadline = Deadline()

    assert deadline.remaining() is None
    assert deadline.expired is False
    assert deadline.bound(5.0) == 5.0


def test_bounded_deadline_caps_timeouts() -> None:
    deadline = Deadline(1.0)

    assert 0 < deadline.bound(5.0) <= 1.0
    assert deadline.bound(0.5) == 0.5
    assert deadline.expired is False


def test_zero_budget_is_expired() -> None:
    deadline = Deadline(0)

    assert deadline.expired is True
    assert deadline.bound(5.0) == 0.0


def test_cancel_expires_immediately() -> None:
    deadline = Deadline(60.0)
    deadline.cancel()

    assert deadline.cancelled is True
    assert deadline.expired is True
    assert deadline.remaining() == 0.0


def test_from_lambda_context_uses_remaining_time() -> None:
    context = SimpleNamespace(get_remaining_time_in_millis=lambda: 3000)

    deadline = Deadline.from_lambda_context(context)

    remaining = deadline.remaining()
    assert remaining is not None
    assert 2.5 < remaining <= 3.0


def test_from_lambda_context_without_context_is_unbounded() -> None:
    assert Deadline.from_lambda_context(None).remaining() is None
