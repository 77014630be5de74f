"""
목적: 토큰 버킷 리미터를 제공한다.
설명: 초당 `rate`개씩 토큰을 채우고 최대 `burst`개까지 쌓는다. 즉시 판정(allow)과
    제한 시간 대기(wait)를 모두 지원한다.
디자인 패턴: 토큰 버킷
참조: src/tarot_reading/shared/runtime/limiter/registry.py, src/tarot_reading/core/reading/queue/redis_task_queue.py
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

Clock = Callable[[], float]
Sleeper = Callable[[float], None]


class TokenBucket:
    """스레드 안전한 토큰 버킷 구현체.

    Args:
        rate: 초당 토큰 보충량. 0이면 초기 버스트 이후 모든 요청을 거절한다.
        burst: 최대 토큰 수(1 이상). 생성 시 가득 찬 상태로 시작한다.
        clock: 단조 증가 시계. 테스트에서 주입한다.
        sleeper: 대기 함수. 테스트에서 주입한다.
    """

    def __init__(
        self,
        rate: float,
        burst: int,
        clock: Optional[Clock] = None,
        sleeper: Optional[Sleeper] = None,
    ) -> None:
        if rate < 0:
            raise ValueError("rate는 0 이상이어야 합니다.")
        if burst < 1:
            raise ValueError("burst는 1 이상이어야 합니다.")
        self._rate = float(rate)
        self._burst = int(burst)
        self._clock = clock or time.monotonic
        self._sleep = sleeper or time.sleep
        self._tokens = float(burst)
        self._updated_at = self._clock()
        self._lock = threading.Lock()

    @property
    def rate(self) -> float:
        """초당 토큰 보충량을 반환한다."""

        return self._rate

    @property
    def burst(self) -> int:
        """최대 토큰 수를 반환한다."""

        return self._burst

    def tokens(self) -> float:
        """현재 사용 가능한 토큰 수를 반환한다."""

        with self._lock:
            self._refill()
            return self._tokens

    def allow(self) -> bool:
        """토큰이 있으면 하나 소비하고 True를 반환한다."""

        with self._lock:
            self._refill()
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False

    def wait(self, timeout: float) -> bool:
        """최대 `timeout`초 동안 토큰을 기다린다.

        제한 시간 안에 토큰이 생길 수 없으면 기다리지 않고 바로 False를 반환한다.
        """

        deadline = self._clock() + max(0.0, timeout)
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return True
                now = self._updated_at
                if self._rate <= 0:
                    return False
                needed = (1.0 - self._tokens) / self._rate
            remaining = deadline - now
            if needed > remaining:
                return False
            self._sleep(needed)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._updated_at
        if elapsed > 0:
            self._tokens = min(float(self._burst), self._tokens + elapsed * self._rate)
        self._updated_at = now
