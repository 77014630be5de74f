"""
목적: 스레드풀 모델을 정의한다.
설명: 스레드풀 설정과 종료 결과 모델을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/tarot_reading/shared/runtime/thread_pool/thread_pool.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ThreadPoolConfig(BaseModel):
    """스레드풀 설정 모델이다.

    Args:
        max_workers: 최대 스레드 수.
        thread_name_prefix: 스레드 이름 접두사.
    """

    max_workers: int = Field(default=4, ge=1)
    thread_name_prefix: str = Field(default="thread-pool")


class ShutdownReport(BaseModel):
    """제한 시간 내 종료 결과 모델이다.

    Args:
        completed: 제한 시간 안에 끝난 태스크 수.
        pending: 제한 시간이 지나도 끝나지 않은 태스크 수.
        timed_out: 대기 제한 시간을 넘겼는지 여부.
    """

    completed: int = 0
    pending: int = 0
    timed_out: bool = False
