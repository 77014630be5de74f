"""
목적: 태스크 실행 컨텍스트를 정의한다.
설명: 태스크 마감 시각과 취소 신호를 함께 들고 다니며, 시도별 타임아웃을 남은 시간으로 제한한다.
디자인 패턴: 컨텍스트 객체
참조: src/tarot_reading/core/reading/services/task_executor.py
"""

from __future__ import annotations

import threading
import time
from typing import Optional


class CallContext:
    """태스크 한 건의 실행 컨텍스트.

    Args:
        deadline: 단조 시계 기준 마감 시각. None이면 마감 없음.
        cancel_event: 외부 취소 신호. None이면 취소되지 않는다.
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self._deadline = deadline
        self._cancel_event = cancel_event or threading.Event()

    @classmethod
    def with_timeout(
        cls,
        seconds: float,
        cancel_event: Optional[threading.Event] = None,
    ) -> "CallContext":
        """지금부터 `seconds`초 뒤 마감되는 컨텍스트를 만든다."""

        return cls(deadline=time.monotonic() + seconds, cancel_event=cancel_event)

    @property
    def deadline(self) -> Optional[float]:
        """마감 시각을 반환한다."""

        return self._deadline

    def cancel(self) -> None:
        """취소 신호를 보낸다."""

        self._cancel_event.set()

    def is_cancelled(self) -> bool:
        """취소되었는지 반환한다."""

        return self._cancel_event.is_set()

    def remaining(self) -> Optional[float]:
        """마감까지 남은 시간(초)을 반환한다. 마감이 없으면 None."""

        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def is_expired(self) -> bool:
        """마감 시각이 지났는지 반환한다."""

        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def bound(self, timeout: float) -> float:
        """`timeout`을 남은 시간 이내로 줄여 반환한다."""

        remaining = self.remaining()
        if remaining is None:
            return timeout
        return min(timeout, remaining)

    def sleep(self, seconds: float) -> bool:
        """최대 `seconds`초 대기한다. 도중에 취소되면 즉시 False를 반환한다."""

        return not self._cancel_event.wait(self.bound(seconds))
