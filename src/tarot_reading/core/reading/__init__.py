"""
목적: 타로 해석 코어 모듈 공개 API를 제공한다.
설명: 태스크 도메인 모델, 태스크 큐, 태스크 실행기를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/core/reading/models/task.py, src/tarot_reading/core/reading/queue/redis_task_queue.py,
    src/tarot_reading/core/reading/services/task_executor.py
"""

from tarot_reading.core.reading.models import CallContext, TarotTask, TaskProgress, TaskStatus
from tarot_reading.core.reading.queue import QueueConfig, QueueMetrics, RedisTaskQueue
from tarot_reading.core.reading.services import ReadingTaskExecutor, RetryConfig, generate_task_id

__all__ = [
    "TarotTask",
    "TaskStatus",
    "TaskProgress",
    "CallContext",
    "RedisTaskQueue",
    "QueueConfig",
    "QueueMetrics",
    "ReadingTaskExecutor",
    "RetryConfig",
    "generate_task_id",
]
