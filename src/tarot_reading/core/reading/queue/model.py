"""
목적: 태스크 큐 설정 모델을 정의한다.
설명: 키 접두사, TTL, 적재 측 유량 제한 값을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/tarot_reading/core/reading/queue/redis_task_queue.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class QueueConfig(BaseModel):
    """태스크 큐 설정 모델이다.

    Args:
        prefix: Redis 키 접두사.
        ttl_seconds: 상태/결과 레코드 만료 시간(초).
        rate_limit: 적재 측 초당 허용량. 0 이하이면 적재 제한을 끈다.
        rate_burst: 적재 측 최대 버스트.
        push_timeout: 적재 토큰을 기다리는 최대 시간(초).
    """

    prefix: str = Field(default="tarot:queue", min_length=1)
    ttl_seconds: int = Field(default=3600, ge=1)
    rate_limit: float = Field(default=12.0, ge=0)
    rate_burst: int = Field(default=50, ge=1)
    push_timeout: float = Field(default=1.0, ge=0)

    @property
    def tasks_key(self) -> str:
        """태스크 리스트 키를 반환한다."""

        return f"{self.prefix}:tasks"

    def status_key(self, task_id: str) -> str:
        """상태 레코드 키를 반환한다."""

        return f"{self.prefix}:status:{task_id}"

    def result_key(self, task_id: str) -> str:
        """결과 레코드 키를 반환한다."""

        return f"{self.prefix}:result:{task_id}"
