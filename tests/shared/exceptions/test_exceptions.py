"""
목적: 공통 예외 분류 체계를 검증한다.
설명: 에러 코드 기본값, 원인 기록, describe/to_dict 출력 형식을 확인한다.
디자인 패턴: 도메인 예외 객체
참조: src/tarot_reading/shared/exceptions/errors.py, src/tarot_reading/shared/exceptions/base.py
"""

from __future__ import annotations

import pytest

from tarot_reading.shared.exceptions import (
    BackendUnavailable,
    BaseAppException,
    ConfigurationError,
    FatalCancellation,
    InvalidFormat,
    NoBackendAvailable,
    RateLimited,
    SerializationError,
    TaskNotFound,
    ValidationError,
)


@pytest.mark.parametrize(
    ("exception_type", "code"),
    [
        (ValidationError, "VALIDATION_ERROR"),
        (TaskNotFound, "TASK_NOT_FOUND"),
        (RateLimited, "RATE_LIMITED"),
        (InvalidFormat, "RATE_LIMIT_FORMAT_INVALID"),
        (SerializationError, "QUEUE_SERIALIZATION_ERROR"),
        (BackendUnavailable, "BACKEND_UNAVAILABLE"),
        (NoBackendAvailable, "NO_BACKEND_AVAILABLE"),
        (FatalCancellation, "FATAL_CANCELLATION"),
        (ConfigurationError, "CONFIGURATION_ERROR"),
    ],
)
def test_default_error_codes(exception_type, code: str) -> None:
    """예외 종류마다 기본 에러 코드가 붙는지 검증한다."""

    error = exception_type("message")

    assert isinstance(error, BaseAppException)
    assert error.detail.code == code


def test_describe_includes_cause() -> None:
    """describe가 메시지와 원인을 한 줄로 합치는지 검증한다."""

    error = BackendUnavailable("호출 실패", cause="status=500")

    assert error.describe() == "호출 실패 (cause=status=500)"
    assert str(error) == error.describe()
    assert BackendUnavailable("호출 실패").describe() == "호출 실패"


def test_cause_defaults_to_original() -> None:
    """원인이 없으면 원본 예외 문자열을 원인으로 쓰는지 검증한다."""

    original = ConnectionError("connection refused")
    error = BackendUnavailable("Redis 연결 실패", original=original)

    assert error.detail.cause == "connection refused"
    assert error.original is original


def test_to_dict_shape() -> None:
    """to_dict가 메시지와 상세 정보를 담는지 검증한다."""

    payload = RateLimited("too many", hint="later", metadata={"limiter": "create"}).to_dict()

    assert payload["message"] == "too many"
    assert payload["detail"]["code"] == "RATE_LIMITED"
    assert payload["detail"]["hint"] == "later"
    assert payload["detail"]["metadata"] == {"limiter": "create"}
    assert payload["original"] is None


def test_retryable_flags() -> None:
    """일시 장애만 재시도 대상으로 표시되는지 검증한다."""

    assert BackendUnavailable.retryable is True
    assert NoBackendAvailable.retryable is True
    assert FatalCancellation.retryable is False
    assert ValidationError.retryable is False
