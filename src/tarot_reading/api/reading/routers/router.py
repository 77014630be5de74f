"""
목적: 타로 해석 API 라우터 집계를 제공한다.
설명: 엔드포인트별 분리 라우터를 하나의 라우터로 묶고 IP 기준 전역 유량 제한을 건다.
디자인 패턴: 컴포지트 패턴
참조: src/tarot_reading/api/reading/routers/*.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tarot_reading.api.const import LIMITER_GLOBAL, READING_API_PREFIX, READING_API_TAG
from tarot_reading.api.middlewares.rate_limit import limit_ip
from tarot_reading.api.reading.routers.get_health import router as get_health_router
from tarot_reading.api.reading.routers.get_reading_result import router as get_reading_result_router
from tarot_reading.api.reading.routers.get_reading_status import router as get_reading_status_router
from tarot_reading.api.reading.routers.submit_reading import router as submit_reading_router

router = APIRouter(
    prefix=READING_API_PREFIX,
    tags=[READING_API_TAG],
    dependencies=[Depends(limit_ip(LIMITER_GLOBAL))],
)
router.include_router(get_health_router)
router.include_router(submit_reading_router)
router.include_router(get_reading_status_router)
router.include_router(get_reading_result_router)
