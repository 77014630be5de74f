"""
목적: 런타임 유틸리티 공개 API를 제공한다.
설명: 스레드풀, 워커풀, 주기 작업, 유량 제한, 동기화 도구를 묶어 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/runtime/worker/worker_pool.py, src/tarot_reading/shared/runtime/limiter/registry.py
"""

from tarot_reading.shared.runtime.limiter import RateLimiterRegistry, TokenBucket, parse_limit
from tarot_reading.shared.runtime.lock import ReadWriteLock
from tarot_reading.shared.runtime.scheduler import PeriodicTask
from tarot_reading.shared.runtime.thread_pool import ThreadPool, ThreadPoolConfig
from tarot_reading.shared.runtime.worker import WorkerConfig, WorkerPool, WorkerState

__all__ = [
    "ThreadPool",
    "ThreadPoolConfig",
    "WorkerPool",
    "WorkerConfig",
    "WorkerState",
    "PeriodicTask",
    "RateLimiterRegistry",
    "TokenBucket",
    "parse_limit",
    "ReadWriteLock",
]
