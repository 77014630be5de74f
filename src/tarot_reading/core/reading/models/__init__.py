"""
목적: 타로 해석 도메인 모델 공개 API를 제공한다.
설명: 태스크 엔티티, 상태, 진행 정보, 실행 컨텍스트를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/core/reading/models/task.py, src/tarot_reading/core/reading/models/context.py
"""

from tarot_reading.core.reading.models.context import CallContext
from tarot_reading.core.reading.models.task import (
    MAX_CARD_ID,
    MAX_CARDS,
    MIN_CARD_ID,
    TarotTask,
    TaskProgress,
    TaskStatus,
    can_transition,
    utc_now,
)

__all__ = [
    "CallContext",
    "TarotTask",
    "TaskProgress",
    "TaskStatus",
    "can_transition",
    "utc_now",
    "MIN_CARD_ID",
    "MAX_CARD_ID",
    "MAX_CARDS",
]
