"""
목적: 도메인 예외 분류 체계를 제공한다.
설명: 검증/유량 제한/직렬화/백엔드 장애/취소 등 처리 방식이 다른 예외를 하위 클래스로 구분한다.
디자인 패턴: 도메인 예외 객체
참조: src/tarot_reading/shared/exceptions/base.py, src/tarot_reading/api/reading/routers/common.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from tarot_reading.shared.exceptions.base import BaseAppException
from tarot_reading.shared.exceptions.models import ExceptionDetail


class _CodedAppException(BaseAppException):
    """기본 에러 코드를 가진 예외 베이스이다.

    Args:
        message: 사용자 또는 시스템에 전달할 메시지.
        cause: 직접 원인 설명.
        original: 원본 예외 객체.
        code: 기본 코드 대신 사용할 에러 코드.
        hint: 해결 힌트.
        metadata: 추가 메타데이터.
    """

    default_code = "APP_ERROR"
    retryable = False

    def __init__(
        self,
        message: str,
        cause: Optional[str] = None,
        original: Optional[Exception] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        detail = ExceptionDetail(
            code=code or self.default_code,
            cause=cause if cause is not None else (str(original) if original else None),
            hint=hint,
            metadata=metadata or {},
        )
        super().__init__(message, detail, original)


class ValidationError(_CodedAppException):
    """잘못된 입력. 즉시 4xx로 반환하며 재시도하지 않는다."""

    default_code = "VALIDATION_ERROR"


class TaskNotFound(_CodedAppException):
    """만료되었거나 존재하지 않는 태스크."""

    default_code = "TASK_NOT_FOUND"


class RateLimited(_CodedAppException):
    """유량 제한 초과. 호출자가 물러나야 하며 자동 재시도하지 않는다."""

    default_code = "RATE_LIMITED"


class InvalidFormat(_CodedAppException):
    """유량 제한 표기(`<count>-<unit>`) 파싱 실패."""

    default_code = "RATE_LIMIT_FORMAT_INVALID"


class SerializationError(_CodedAppException):
    """태스크 인코딩/디코딩 실패."""

    default_code = "QUEUE_SERIALIZATION_ERROR"


class BackendUnavailable(_CodedAppException):
    """일시적 인프라 장애. 워커가 설정된 한도까지 재시도한다."""

    default_code = "BACKEND_UNAVAILABLE"
    retryable = True


class NoBackendAvailable(_CodedAppException):
    """선택할 해석 백엔드 인스턴스가 하나도 없다."""

    default_code = "NO_BACKEND_AVAILABLE"
    retryable = True


class FatalCancellation(_CodedAppException):
    """호출 측이 포기했다(취소 또는 기한 초과). 재시도하지 않는다."""

    default_code = "FATAL_CANCELLATION"


class ConfigurationError(_CodedAppException):
    """기동 시점 설정 오류."""

    default_code = "CONFIGURATION_ERROR"
