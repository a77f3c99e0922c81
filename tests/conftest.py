import pytest

from otpkit.common.otp import OtpEngine


class FixedClock:
    """Clock that returns a settable number of seconds since the epoch"""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def at_step(self, step, offset=0):
        self.now = step * 30 + offset
        return self


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def engine(clock):
    return OtpEngine(clock=clock)
