"""
목적: 타로 해석 라우터 공통 유틸을 제공한다.
설명: 도메인 예외를 HTTP 예외로 변환하는 헬퍼를 제공한다.
디자인 패턴: 유틸리티 모듈
참조: src/tarot_reading/api/reading/routers/router.py
"""

from __future__ import annotations

from fastapi import HTTPException, status

from tarot_reading.shared.exceptions import BaseAppException

_STATUS_BY_CODE = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "TASK_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RATE_LIMITED": status.HTTP_429_TOO_MANY_REQUESTS,
    "BACKEND_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "NO_BACKEND_AVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: BaseAppException) -> HTTPException:
    """도메인 예외를 HTTP 예외로 변환한다."""

    status_code = _STATUS_BY_CODE.get(
        error.detail.code,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return HTTPException(status_code=status_code, detail=error.to_dict())
