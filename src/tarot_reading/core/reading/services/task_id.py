"""
목적: 태스크 식별자 생성기를 제공한다.
설명: `task_<epoch 밀리초>_<uuid4 hex 12자리>` 형식의 식별자를 만든다.
    같은 밀리초에 들어온 요청끼리도 겹치지 않도록 난수 부분은 uuid4에서 가져온다.
디자인 패턴: 유틸리티 함수
참조: src/tarot_reading/api/reading/services/reading_service.py
"""

from __future__ import annotations

import time
from typing import Callable, Optional
from uuid import uuid4

TASK_ID_SUFFIX_LENGTH = 12


def generate_task_id(clock: Optional[Callable[[], float]] = None) -> str:
    """새 태스크 식별자를 반환한다."""

    now = (clock or time.time)()
    timestamp_ms = int(now * 1000)
    suffix = uuid4().hex[:TASK_ID_SUFFIX_LENGTH]
    return f"task_{timestamp_ms}_{suffix}"
