"""
목적: 해석 백엔드 연동 공개 API를 제공한다.
설명: HTTP 클라이언트, 백엔드 풀, 헬스 프로버, 인스턴스 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/integrations/interpreter/pool.py, src/tarot_reading/integrations/interpreter/client.py
"""

from tarot_reading.integrations.interpreter.client import InterpretationClient, extract_answer
from tarot_reading.integrations.interpreter.model import BackendInstance, BackendSnapshot, PoolConfig
from tarot_reading.integrations.interpreter.pool import BackendPool
from tarot_reading.integrations.interpreter.prober import HealthProber
from tarot_reading.integrations.interpreter.sliding_window import SlidingWindowCounter

__all__ = [
    "InterpretationClient",
    "extract_answer",
    "BackendInstance",
    "BackendSnapshot",
    "PoolConfig",
    "BackendPool",
    "HealthProber",
    "SlidingWindowCounter",
]
