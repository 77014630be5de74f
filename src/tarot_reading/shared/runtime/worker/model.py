"""
목적: 워커풀 설정 및 상태 모델을 정의한다.
설명: 워커풀 실행 파라미터와 상태 값을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/tarot_reading/shared/runtime/worker/worker_pool.py
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class WorkerState(str, Enum):
    """워커 상태 열거형."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"


class WorkerConfig(BaseModel):
    """워커풀 설정 모델이다.

    Args:
        name: 워커풀 이름. 스레드 이름 접두사로도 쓴다.
        worker_count: 동시에 실행할 소비 루프 수.
        poll_timeout: 큐 폴링 타임아웃(초). 종료 신호 확인 주기이기도 하다.
        shutdown_timeout: 종료 시 실행 중인 작업을 기다리는 최대 시간(초).
    """

    name: str = Field(default="worker")
    worker_count: int = Field(default=10, ge=1)
    poll_timeout: float = Field(default=1.0, gt=0)
    shutdown_timeout: float = Field(default=30.0, ge=0)
