"""
목적: 타로 해석 서비스 헬스 API 모델을 정의한다.
설명: 준비 상태 응답과 큐/백엔드 운영 지표 응답 모델을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/tarot_reading/api/reading/routers/get_health.py
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from tarot_reading.core.reading.queue import MetricsSnapshot
from tarot_reading.integrations.interpreter import BackendSnapshot


class ReadinessResponse(BaseModel):
    """준비 상태 응답 모델."""

    status: str
    time: int


class QueueHealthResponse(BaseModel):
    """큐 운영 지표 응답 모델."""

    queue_size: int
    workers: int
    worker_state: str
    metrics: MetricsSnapshot
    backends: List[BackendSnapshot]
