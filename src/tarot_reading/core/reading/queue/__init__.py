"""
목적: 태스크 큐 공개 API를 제공한다.
설명: Redis 태스크 큐, 큐 설정, 지표 수집기를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/core/reading/queue/redis_task_queue.py
"""

from tarot_reading.core.reading.queue.metrics import (
    LatencySnapshot,
    MetricsSnapshot,
    QueueMetrics,
    QueueOperation,
)
from tarot_reading.core.reading.queue.model import QueueConfig
from tarot_reading.core.reading.queue.redis_task_queue import RedisTaskQueue

__all__ = [
    "RedisTaskQueue",
    "QueueConfig",
    "QueueMetrics",
    "QueueOperation",
    "MetricsSnapshot",
    "LatencySnapshot",
]
