"""
목적: 유량 제한 공개 API를 제공한다.
설명: 제한 표기 파서, 토큰 버킷, 키별 레지스트리를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/runtime/limiter/registry.py
"""

from tarot_reading.shared.runtime.limiter.rate import UNIT_SECONDS, parse_limit
from tarot_reading.shared.runtime.limiter.registry import (
    DEFAULT_BURST,
    DEFAULT_IDLE_TTL,
    RateDecision,
    RateLimiterRegistry,
)
from tarot_reading.shared.runtime.limiter.token_bucket import TokenBucket

__all__ = [
    "UNIT_SECONDS",
    "parse_limit",
    "TokenBucket",
    "RateDecision",
    "RateLimiterRegistry",
    "DEFAULT_BURST",
    "DEFAULT_IDLE_TTL",
]
