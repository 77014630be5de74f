"""
목적: 토큰 버킷 동작을 검증한다.
설명: 초기 버스트, 시간 경과에 따른 보충, 제한 시간 대기, 잘못된 인자 거절을 가짜 시계로 확인한다.
디자인 패턴: 토큰 버킷
참조: src/tarot_reading/shared/runtime/limiter/token_bucket.py
"""

from __future__ import annotations

import pytest

from tarot_reading.shared.runtime.limiter import TokenBucket


class FakeClock:
    """수동으로 흐르는 단조 시계."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


def test_burst_then_refill() -> None:
    """버스트 5, 초당 1에서 5건 허용 후 거절하고 1초 뒤 1건 허용하는지 검증한다."""

    clock = FakeClock()
    bucket = TokenBucket(rate=1.0, burst=5, clock=clock)

    assert [bucket.allow() for _ in range(5)] == [True] * 5
    assert bucket.allow() is False

    clock.now += 1.0
    assert bucket.allow() is True
    assert bucket.allow() is False


def test_tokens_never_exceed_burst() -> None:
    """오래 쉬어도 토큰이 버스트를 넘지 않는지 검증한다."""

    clock = FakeClock()
    bucket = TokenBucket(rate=10.0, burst=3, clock=clock)
    bucket.allow()

    clock.now += 3600
    assert bucket.tokens() == pytest.approx(3.0)


def test_wait_sleeps_until_token_available() -> None:
    """제한 시간 안에 토큰이 생기면 기다렸다가 허용하는지 검증한다."""

    clock = FakeClock()
    bucket = TokenBucket(rate=2.0, burst=1, clock=clock, sleeper=clock.sleep)
    assert bucket.allow() is True

    assert bucket.wait(timeout=1.0) is True
    assert clock.now == pytest.approx(100.5)


def test_wait_gives_up_when_timeout_too_short() -> None:
    """제한 시간 안에 토큰이 생길 수 없으면 바로 거절하는지 검증한다."""

    clock = FakeClock()
    bucket = TokenBucket(rate=1.0, burst=1, clock=clock, sleeper=clock.sleep)
    bucket.allow()

    assert bucket.wait(timeout=0.1) is False
    assert clock.now == pytest.approx(100.0)


def test_zero_rate_allows_only_initial_burst() -> None:
    """rate 0이면 초기 버스트 이후 계속 거절하는지 검증한다."""

    clock = FakeClock()
    bucket = TokenBucket(rate=0.0, burst=2, clock=clock)

    assert bucket.allow() is True
    assert bucket.allow() is True
    clock.now += 10_000
    assert bucket.allow() is False
    assert bucket.wait(timeout=5.0) is False


@pytest.mark.parametrize(("rate", "burst"), [(-1.0, 1), (1.0, 0)])
def test_invalid_arguments(rate: float, burst: int) -> None:
    """음수 rate나 1 미만 burst를 거절하는지 검증한다."""

    with pytest.raises(ValueError):
        TokenBucket(rate=rate, burst=burst)
