"""
목적: 키별 토큰 버킷 저장소를 제공한다.
설명: 클라이언트 IP 또는 라우트+IP 키마다 토큰 버킷을 지연 생성하고, 오래 쓰이지 않은 버킷을 정리한다.
    제한 표기가 잘못되면 오류를 기록하고 요청을 통과시킨다.
디자인 패턴: 레지스트리, 우아한 성능 저하
참조: src/tarot_reading/shared/runtime/limiter/token_bucket.py, src/tarot_reading/api/middlewares/rate_limit.py
"""

from __future__ import annotations

import threading
import time
from typing import Dict, Optional

from pydantic import BaseModel

from tarot_reading.shared.exceptions import InvalidFormat
from tarot_reading.shared.logging import Logger, create_default_logger
from tarot_reading.shared.runtime.limiter.rate import parse_limit
from tarot_reading.shared.runtime.limiter.token_bucket import Clock, TokenBucket

DEFAULT_BURST = 100
DEFAULT_IDLE_TTL = 24 * 60 * 60


class RateDecision(BaseModel):
    """단일 요청에 대한 판정 결과 모델이다.

    Args:
        allowed: 요청 허용 여부.
        limit: 초당 허용량. 제한이 꺼져 있으면 None.
        remaining: 판정 후 남은 토큰 수.
        reset_at: 응답 헤더용 리셋 시각(epoch 초).
    """

    allowed: bool
    limit: Optional[float] = None
    remaining: float = 0.0
    reset_at: int = 0


class RateLimiterRegistry:
    """키별 토큰 버킷 레지스트리 구현체.

    Args:
        limit: `"<count>-<unit>"` 형식의 제한 표기.
        burst: 키마다 허용하는 최대 버스트.
        clock: 버킷과 접근 시각에 쓰는 단조 시계.
        logger: 로거.
    """

    def __init__(
        self,
        limit: str,
        burst: int = DEFAULT_BURST,
        clock: Optional[Clock] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._limit = limit
        self._burst = burst
        self._clock = clock or time.monotonic
        self._logger = logger or create_default_logger("RateLimiterRegistry")
        self._buckets: Dict[str, TokenBucket] = {}
        self._last_access: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._rate: Optional[float] = None
        try:
            self._rate = parse_limit(limit)
        except InvalidFormat as error:
            self._logger.error(f"리미터 생성 실패, 제한 없이 통과시킵니다: {error}")

    @property
    def limit(self) -> str:
        """제한 표기를 반환한다."""

        return self._limit

    @property
    def enabled(self) -> bool:
        """제한 표기가 유효해 실제로 제한 중인지 반환한다."""

        return self._rate is not None

    def __len__(self) -> int:
        return len(self._buckets)

    def allow(self, key: str) -> bool:
        """`key`의 요청을 허용할지 판정한다."""

        return self.check(key).allowed

    def check(self, key: str) -> RateDecision:
        """`key`의 요청을 판정하고 헤더용 정보를 함께 반환한다."""

        if self._rate is None:
            return RateDecision(allowed=True)
        bucket = self._get_bucket(key)
        allowed = bucket.allow()
        return RateDecision(
            allowed=allowed,
            limit=bucket.rate,
            remaining=bucket.tokens(),
            reset_at=int(time.time()) + 1,
        )

    def cleanup(self, max_idle: float = DEFAULT_IDLE_TTL) -> int:
        """`max_idle`초 넘게 접근이 없던 키를 제거하고 제거한 개수를 반환한다."""

        now = self._clock()
        removed = 0
        with self._lock:
            for key, last_access in list(self._last_access.items()):
                if now - last_access > max_idle:
                    self._buckets.pop(key, None)
                    self._last_access.pop(key, None)
                    removed += 1
        if removed:
            self._logger.info(f"유휴 리미터를 정리했습니다: removed={removed}, remaining={len(self)}")
        return removed

    def _get_bucket(self, key: str) -> TokenBucket:
        # 접근 시각 기록과 버킷 조회는 정리 작업과 같은 잠금 아래에서 한다.
        with self._lock:
            self._last_access[key] = self._clock()
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = TokenBucket(self._rate or 0.0, self._burst, clock=self._clock)
                self._buckets[key] = bucket
            return bucket
