"""
목적: 타로 해석 요청 라우터를 제공한다.
설명: 해석 요청을 검증해 태스크 큐에 적재하는 엔드포인트를 정의한다.
디자인 패턴: 라우터 패턴
참조: src/tarot_reading/api/reading/services/reading_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from tarot_reading.api.const import LIMITER_CREATE, READING_CREATE_PATH
from tarot_reading.api.middlewares.rate_limit import limit_per_route
from tarot_reading.api.reading.models import SubmitReadingRequest, SubmitReadingResponse
from tarot_reading.api.reading.routers.common import to_http_exception
from tarot_reading.api.reading.services import ReadingAPIService, get_reading_service
from tarot_reading.shared.exceptions import BaseAppException

router = APIRouter()


@router.post(
    READING_CREATE_PATH,
    response_model=SubmitReadingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="타로 해석을 요청합니다.",
    dependencies=[Depends(limit_per_route(LIMITER_CREATE))],
)
def submit_reading(
    request: SubmitReadingRequest,
    service: ReadingAPIService = Depends(get_reading_service),
) -> SubmitReadingResponse:
    """해석 요청을 큐에 등록한다."""

    try:
        return service.submit(request)
    except BaseAppException as error:
        raise to_http_exception(error) from error
