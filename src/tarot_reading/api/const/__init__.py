"""
목적: API 상수 공개 API를 제공한다.
설명: 타로 해석 라우팅 상수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/api/const/reading.py
"""

from tarot_reading.api.const.reading import (
    LIMITER_CREATE,
    LIMITER_GLOBAL,
    LIMITER_QUERY,
    READING_API_PREFIX,
    READING_API_TAG,
    READING_CREATE_PATH,
    READING_HEALTH_PATH,
    READING_QUEUE_HEALTH_PATH,
    READING_RESULT_PATH,
    READING_STATUS_PATH,
)

__all__ = [
    "READING_API_PREFIX",
    "READING_API_TAG",
    "READING_CREATE_PATH",
    "READING_RESULT_PATH",
    "READING_STATUS_PATH",
    "READING_HEALTH_PATH",
    "READING_QUEUE_HEALTH_PATH",
    "LIMITER_GLOBAL",
    "LIMITER_CREATE",
    "LIMITER_QUERY",
]
