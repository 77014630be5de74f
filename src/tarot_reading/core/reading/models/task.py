"""
목적: 타로 해석 태스크 엔티티를 정의한다.
설명: 태스크 본문, 상태 열거형, 전진 전용 상태 전이 규칙, 폴링용 진행 정보를 Pydantic으로 제공한다.
디자인 패턴: 엔티티 패턴, 상태 머신
참조: src/tarot_reading/core/reading/queue/redis_task_queue.py, src/tarot_reading/core/reading/services/task_executor.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field, field_validator

MIN_CARD_ID = 1
MAX_CARD_ID = 78
MAX_CARDS = 3


def utc_now() -> datetime:
    """UTC 기준 timezone-aware 현재 시각을 반환한다."""

    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    """태스크 상태 타입."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """더 이상 바뀌지 않는 최종 상태인지 반환한다."""

        return self in (TaskStatus.COMPLETED, TaskStatus.FAILED)


_ALLOWED_TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    TaskStatus.PENDING: frozenset(
        {TaskStatus.PENDING, TaskStatus.RUNNING, TaskStatus.COMPLETED, TaskStatus.FAILED}
    ),
    TaskStatus.RUNNING: frozenset(
        {TaskStatus.RUNNING, TaskStatus.COMPLETED, TaskStatus.FAILED}
    ),
    TaskStatus.COMPLETED: frozenset({TaskStatus.COMPLETED}),
    TaskStatus.FAILED: frozenset({TaskStatus.FAILED}),
}


def can_transition(current: Optional[TaskStatus], target: TaskStatus) -> bool:
    """`current`에서 `target`으로 바꿀 수 있는지 반환한다.

    현재 상태가 없으면(만료 또는 미등록) 어떤 상태든 기록할 수 있다.
    """

    if current is None:
        return True
    return target in _ALLOWED_TRANSITIONS[current]


class TarotTask(BaseModel):
    """타로 해석 태스크 엔티티.

    큐에 JSON으로 저장되는 본문이다. `status`/`result`는 생성 시점 값이며,
    이후 상태와 결과는 별도 레코드에서 관리한다.
    """

    id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    question: str = Field(min_length=1)
    cards: List[int] = Field(min_length=1, max_length=MAX_CARDS)
    status: TaskStatus = TaskStatus.PENDING
    result: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("question")
    @classmethod
    def _question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("질문은 공백일 수 없습니다.")
        return value

    @field_validator("cards")
    @classmethod
    def _cards_in_deck(cls, value: List[int]) -> List[int]:
        for card in value:
            if card < MIN_CARD_ID or card > MAX_CARD_ID:
                raise ValueError(f"유효하지 않은 카드 번호입니다: {card}")
        return value

    def cards_text(self) -> str:
        """백엔드 호출용 카드 문자열(`"1,15,21"`)을 반환한다."""

        return ",".join(str(card) for card in self.cards)


class TaskProgress(BaseModel):
    """폴링 응답용 태스크 진행 정보.

    `result`는 최종 상태일 때만 채운다. 실패 태스크의 `result`는 마지막 오류 설명이다.
    """

    task_id: str
    status: TaskStatus
    result: Optional[str] = None
