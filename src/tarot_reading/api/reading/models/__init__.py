"""
목적: 타로 해석 API 모델 공개 API를 제공한다.
설명: 요청/응답 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/api/reading/models/submit.py, src/tarot_reading/api/reading/models/status.py
"""

from tarot_reading.api.reading.models.health import QueueHealthResponse, ReadinessResponse
from tarot_reading.api.reading.models.status import ReadingResultResponse, ReadingStatusResponse
from tarot_reading.api.reading.models.submit import SubmitReadingRequest, SubmitReadingResponse

__all__ = [
    "SubmitReadingRequest",
    "SubmitReadingResponse",
    "ReadingStatusResponse",
    "ReadingResultResponse",
    "ReadinessResponse",
    "QueueHealthResponse",
]
