import pytest

from cmsops.client.throttle import Throttle


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def test_first_call_does_not_wait():
    clock = FakeClock()
    throttle = Throttle(5.0, clock=clock, sleep=clock.sleep)

    assert throttle.acquire() == 0.0
    assert clock.sleeps == []


def test_back_to_back_calls_are_spaced_by_rate():
    clock = FakeClock()
    throttle = Throttle(5.0, clock=clock, sleep=clock.sleep)

    for _ in range(4):
        throttle.acquire()

    assert clock.sleeps == pytest.approx([0.2, 0.2, 0.2])


def test_no_wait_when_caller_is_already_slow():
    clock = FakeClock()
    throttle = Throttle(10.0, clock=clock, sleep=clock.sleep)

    throttle.acquire()
    clock.now += 1.0
    throttle.acquire()

    assert clock.sleeps == []


def test_capacity_allows_a_burst():
    clock = FakeClock()
    throttle = Throttle(1.0, capacity=3, clock=clock, sleep=clock.sleep)

    for _ in range(3):
        throttle.acquire()
    throttle.acquire()

    assert clock.sleeps == pytest.approx([1.0])


def test_rejects_non_positive_rate():
    with pytest.raises(ValueError):
        Throttle(0)


def test_time_slept_counts_toward_the_next_call():
    clock = FakeClock()
    throttle = Throttle(5.0, clock=clock, sleep=clock.sleep)

    throttle.acquire()
    throttle.acquire()
    clock.now += 0.2
    throttle.acquire()

    assert clock.sleeps == pytest.approx([0.2])
