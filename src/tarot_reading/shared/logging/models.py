"""
목적: 로깅에 필요한 공통 모델을 정의한다.
설명: 로그 레벨, 태스크/워커 단위 컨텍스트, 레코드 구조를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/tarot_reading/shared/logging/logger.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """로그 레벨 열거형."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        """레벨 비교용 정수 값을 반환한다."""

        return _SEVERITY[self]


_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
    LogLevel.CRITICAL: 50,
}


class LogContext(BaseModel):
    """로그 컨텍스트 모델이다.

    Args:
        request_id: HTTP 요청 식별자.
        task_id: 타로 해석 태스크 식별자.
        worker_id: 태스크를 처리 중인 워커 루프 번호.
        backend_url: 호출 대상 해석 백엔드 URL.
        user_id: 사용자 식별자.
        tags: 자유형 태그.
    """

    request_id: Optional[str] = None
    task_id: Optional[str] = None
    worker_id: Optional[str] = None
    backend_url: Optional[str] = None
    user_id: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)


def _utc_now() -> datetime:
    """UTC 기준의 timezone-aware 시간을 반환한다."""

    return datetime.now(timezone.utc)


class LogRecord(BaseModel):
    """로그 레코드 모델이다.

    Args:
        level: 로그 레벨.
        message: 로그 메시지.
        timestamp: 기록 시각.
        logger_name: 로거 이름.
        context: 로그 컨텍스트.
        metadata: 추가 메타데이터.
    """

    level: LogLevel
    message: str
    timestamp: datetime = Field(default_factory=_utc_now)
    logger_name: str
    context: Optional[LogContext] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
