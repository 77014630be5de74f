"""
목적: 타로 해석 서비스 헬스 라우터를 제공한다.
설명: Redis/백엔드 준비 상태 점검과 큐 운영 지표 조회 엔드포인트를 정의한다.
디자인 패턴: 라우터 패턴
참조: src/tarot_reading/api/reading/services/reading_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from tarot_reading.api.const import READING_HEALTH_PATH, READING_QUEUE_HEALTH_PATH
from tarot_reading.api.reading.models import QueueHealthResponse, ReadinessResponse
from tarot_reading.api.reading.routers.common import to_http_exception
from tarot_reading.api.reading.services import ReadingAPIService, get_reading_service
from tarot_reading.shared.exceptions import BaseAppException

router = APIRouter()


@router.get(
    READING_HEALTH_PATH,
    response_model=ReadinessResponse,
    summary="큐와 해석 백엔드 준비 상태를 조회합니다.",
)
def get_readiness(
    service: ReadingAPIService = Depends(get_reading_service),
) -> ReadinessResponse:
    """Redis와 해석 백엔드가 모두 준비되었는지 확인한다."""

    try:
        return service.readiness()
    except BaseAppException as error:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=error.to_dict(),
        ) from error


@router.get(
    READING_QUEUE_HEALTH_PATH,
    response_model=QueueHealthResponse,
    summary="큐 길이와 처리 지표를 조회합니다.",
)
def get_queue_health(
    service: ReadingAPIService = Depends(get_reading_service),
) -> QueueHealthResponse:
    """큐 길이, 처리 지표, 백엔드 상태를 반환한다."""

    try:
        return service.queue_health()
    except BaseAppException as error:
        raise to_http_exception(error) from error
