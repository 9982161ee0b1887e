"""Tests for SoftDeadline — advisory budget with an injected clock."""

from domainwatch.core.soft_deadline import SoftDeadline


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def test_not_exceeded_at_start():
    clock = FakeClock()
    deadline = SoftDeadline(9.0, clock)
    assert not deadline.exceeded()
    assert deadline.elapsed_ms() == 0


def test_exactly_at_budget_is_not_exceeded():
    clock = FakeClock()
    deadline = SoftDeadline(9.0, clock)
    clock.now += 9.0
    assert not deadline.exceeded()


def test_past_budget_is_exceeded():
    clock = FakeClock()
    deadline = SoftDeadline(9.0, clock)
    clock.now += 9.001
    assert deadline.exceeded()
    assert deadline.elapsed_ms() == 9001
