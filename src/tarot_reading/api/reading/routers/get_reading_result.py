"""
목적: 타로 해석 결과 조회 라우터를 제공한다.
설명: task_id 기준 결과 조회 엔드포인트를 정의한다.
디자인 패턴: 라우터 패턴
참조: src/tarot_reading/api/reading/services/reading_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tarot_reading.api.const import LIMITER_QUERY, READING_RESULT_PATH
from tarot_reading.api.middlewares.rate_limit import limit_per_route
from tarot_reading.api.reading.models import ReadingResultResponse
from tarot_reading.api.reading.routers.common import to_http_exception
from tarot_reading.api.reading.services import ReadingAPIService, get_reading_service
from tarot_reading.shared.exceptions import BaseAppException

router = APIRouter()


@router.get(
    READING_RESULT_PATH,
    response_model=ReadingResultResponse,
    summary="타로 해석 결과를 조회합니다.",
    dependencies=[Depends(limit_per_route(LIMITER_QUERY))],
)
def get_reading_result(
    task_id: str,
    service: ReadingAPIService = Depends(get_reading_service),
) -> ReadingResultResponse:
    """태스크 결과를 조회한다."""

    try:
        return service.get_result(task_id)
    except BaseAppException as error:
        raise to_http_exception(error) from error
