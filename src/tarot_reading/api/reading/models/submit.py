"""
목적: 타로 해석 요청 API 모델을 정의한다.
설명: 해석 요청 본문과 접수 응답 모델을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/tarot_reading/api/reading/routers/submit_reading.py
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from tarot_reading.core.reading.models import MAX_CARDS, TaskStatus


class SubmitReadingRequest(BaseModel):
    """타로 해석 요청 모델.

    본문 형식만 검사한다. 카드 번호 범위 같은 도메인 검증은 서비스에서 한다.
    """

    user_id: str = Field(..., description="사용자 식별자")
    question: str = Field(..., description="질문 본문")
    cards: List[int] = Field(..., description=f"뽑은 카드 번호(1~78, 1~{MAX_CARDS}장)")


class SubmitReadingResponse(BaseModel):
    """타로 해석 접수 응답 모델."""

    task_id: str
    status: TaskStatus
    created_at: datetime
