"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 모델, 베이스 클래스, 도메인 예외 분류를 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/exceptions/models.py, src/tarot_reading/shared/exceptions/base.py, src/tarot_reading/shared/exceptions/errors.py
"""

from tarot_reading.shared.exceptions.base import BaseAppException
from tarot_reading.shared.exceptions.errors import (
    BackendUnavailable,
    ConfigurationError,
    FatalCancellation,
    InvalidFormat,
    NoBackendAvailable,
    RateLimited,
    SerializationError,
    TaskNotFound,
    ValidationError,
)
from tarot_reading.shared.exceptions.models import ExceptionDetail

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "ValidationError",
    "TaskNotFound",
    "RateLimited",
    "InvalidFormat",
    "SerializationError",
    "BackendUnavailable",
    "NoBackendAvailable",
    "FatalCancellation",
    "ConfigurationError",
]
