"""
목적: 타로 해석 상태/결과 API 모델을 정의한다.
설명: task_id 기반 상태 조회와 결과 조회 응답 모델을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/tarot_reading/api/reading/services/reading_service.py
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from tarot_reading.core.reading.models import TaskStatus


class ReadingStatusResponse(BaseModel):
    """상태 조회 응답 모델."""

    task_id: str
    status: TaskStatus


class ReadingResultResponse(BaseModel):
    """결과 조회 응답 모델.

    `result`는 완료 시에만, `error_message`는 실패 시에만 채운다.
    """

    task_id: str
    status: TaskStatus
    result: Optional[str] = None
    error_message: Optional[str] = None
