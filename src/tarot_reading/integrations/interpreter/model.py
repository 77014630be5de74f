"""
목적: 해석 백엔드 인스턴스와 풀 설정 모델을 정의한다.
설명: 풀 내부에서 잠금 아래 변경되는 인스턴스 상태와, 외부 노출용 스냅샷(비밀 키 제외)을 분리한다.
디자인 패턴: 엔티티 패턴, 데이터 전송 객체(DTO)
참조: src/tarot_reading/integrations/interpreter/pool.py, src/tarot_reading/integrations/interpreter/sliding_window.py
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Union

from pydantic import BaseModel, Field, SecretStr

from tarot_reading.integrations.interpreter.sliding_window import SlidingWindowCounter


class PoolConfig(BaseModel):
    """백엔드 풀 설정 모델이다.

    Args:
        failure_threshold: 비정상 판정까지의 연속 실패 횟수.
        load_window_seconds: 최근 요청 수를 세는 창 크기(초).
        probe_timeout: 헬스 프로브 요청 타임아웃(초).
    """

    failure_threshold: int = Field(default=3, ge=1)
    load_window_seconds: float = Field(default=300.0, gt=0)
    probe_timeout: float = Field(default=5.0, gt=0)


class BackendInstance:
    """해석 백엔드 인스턴스 상태.

    상태 필드는 `BackendPool`의 잠금 아래에서만 바꾼다. API 키는 로그나 스냅샷에 싣지 않는다.
    """

    def __init__(
        self,
        url: str,
        api_key: Union[str, SecretStr],
        load_window_seconds: float = 300.0,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.api_key = api_key if isinstance(api_key, SecretStr) else SecretStr(api_key)
        self.healthy = True
        self.error_count = 0
        self.last_error: Optional[str] = None
        self.last_used: Optional[datetime] = None
        self.requests = SlidingWindowCounter(load_window_seconds, clock=clock)

    def __repr__(self) -> str:
        return (
            f"BackendInstance(url={self.url!r}, healthy={self.healthy}, "
            f"error_count={self.error_count})"
        )


class BackendSnapshot(BaseModel):
    """백엔드 인스턴스 스냅샷(운영 조회용)."""

    url: str
    healthy: bool
    error_count: int
    last_error: Optional[str] = None
    last_used: Optional[datetime] = None
    recent_request_count: int = 0
