"""
목적: 시간 창 기반 요청 카운터를 제공한다.
설명: 최근 `window`초 동안 기록된 요청 수를 센다. 창 밖의 기록은 기록 시점에 버린다.
디자인 패턴: 슬라이딩 윈도우
참조: src/tarot_reading/integrations/interpreter/model.py
"""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, Optional


class SlidingWindowCounter:
    """슬라이딩 윈도우 요청 카운터.

    자체 잠금이 없다. `add`는 소유자(백엔드 풀)의 쓰기 잠금 아래에서만 호출한다.
    """

    def __init__(self, window: float = 300.0, clock: Optional[Callable[[], float]] = None) -> None:
        if window <= 0:
            raise ValueError("window는 0보다 커야 합니다.")
        self._window = window
        self._clock = clock or time.monotonic
        self._events: Deque[float] = deque()

    @property
    def window(self) -> float:
        """창 크기(초)를 반환한다."""

        return self._window

    def add(self) -> None:
        """요청 1건을 기록한다."""

        now = self._clock()
        self._evict(now)
        self._events.append(now)

    def count(self) -> int:
        """창 안의 요청 수를 반환한다. 기록을 버리지 않으므로 읽기 잠금 아래에서도 호출할 수 있다."""

        threshold = self._clock() - self._window
        return sum(1 for event in tuple(self._events) if event > threshold)

    def _evict(self, now: float) -> None:
        threshold = now - self._window
        while self._events and self._events[0] <= threshold:
            self._events.popleft()
