"""
목적: 타로 해석 상태 조회 라우터를 제공한다.
설명: task_id 기준 상태 조회 엔드포인트를 정의한다.
디자인 패턴: 라우터 패턴
참조: src/tarot_reading/api/reading/services/reading_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tarot_reading.api.const import LIMITER_QUERY, READING_STATUS_PATH
from tarot_reading.api.middlewares.rate_limit import limit_per_route
from tarot_reading.api.reading.models import ReadingStatusResponse
from tarot_reading.api.reading.routers.common import to_http_exception
from tarot_reading.api.reading.services import ReadingAPIService, get_reading_service
from tarot_reading.shared.exceptions import BaseAppException

router = APIRouter()


@router.get(
    READING_STATUS_PATH,
    response_model=ReadingStatusResponse,
    summary="타로 해석 태스크 상태를 조회합니다.",
    dependencies=[Depends(limit_per_route(LIMITER_QUERY))],
)
def get_reading_status(
    task_id: str,
    service: ReadingAPIService = Depends(get_reading_service),
) -> ReadingStatusResponse:
    """태스크 상태를 조회한다."""

    try:
        return service.get_status(task_id)
    except BaseAppException as error:
        raise to_http_exception(error) from error
