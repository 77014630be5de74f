"""
목적: 큐 처리 지표 수집기를 제공한다.
설명: 적재/수신/처리 작업별 성공·실패 횟수와 지연 통계를 프로세스 메모리에 집계한다.
디자인 패턴: 수집기(Collector)
참조: src/tarot_reading/core/reading/queue/redis_task_queue.py, src/tarot_reading/api/health/routers/server.py
"""

from __future__ import annotations

import threading
from collections import deque
from enum import Enum
from typing import Deque, Dict

from pydantic import BaseModel

RECENT_SAMPLES = 100


class QueueOperation(str, Enum):
    """지표 작업 종류."""

    PUSH = "push"
    POP = "pop"
    PROCESS = "process"


class LatencySnapshot(BaseModel):
    """지연 통계 스냅샷(밀리초)."""

    count: int = 0
    avg_ms: float = 0.0
    max_ms: float = 0.0
    recent_avg_ms: float = 0.0


class MetricsSnapshot(BaseModel):
    """지표 전체 스냅샷."""

    success: Dict[str, int]
    errors: Dict[str, int]
    latency: Dict[str, LatencySnapshot]


class _LatencyStats:
    def __init__(self) -> None:
        self.count = 0
        self.total_ms = 0.0
        self.max_ms = 0.0
        self.recent: Deque[float] = deque(maxlen=RECENT_SAMPLES)

    def record(self, ms: float) -> None:
        self.count += 1
        self.total_ms += ms
        self.max_ms = max(self.max_ms, ms)
        self.recent.append(ms)

    def snapshot(self) -> LatencySnapshot:
        if self.count == 0:
            return LatencySnapshot()
        return LatencySnapshot(
            count=self.count,
            avg_ms=self.total_ms / self.count,
            max_ms=self.max_ms,
            recent_avg_ms=sum(self.recent) / len(self.recent),
        )


class QueueMetrics:
    """스레드 안전한 큐 지표 수집기."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._success: Dict[QueueOperation, int] = {op: 0 for op in QueueOperation}
        self._errors: Dict[QueueOperation, int] = {op: 0 for op in QueueOperation}
        self._latency: Dict[QueueOperation, _LatencyStats] = {
            op: _LatencyStats() for op in QueueOperation
        }

    def record_success(self, operation: QueueOperation) -> None:
        """성공 1건을 기록한다."""

        with self._lock:
            self._success[operation] += 1

    def record_error(self, operation: QueueOperation) -> None:
        """실패 1건을 기록한다."""

        with self._lock:
            self._errors[operation] += 1

    def record_latency(self, operation: QueueOperation, seconds: float) -> None:
        """지연 시간 1건을 기록한다."""

        with self._lock:
            self._latency[operation].record(seconds * 1000.0)

    def success_count(self, operation: QueueOperation) -> int:
        with self._lock:
            return self._success[operation]

    def error_count(self, operation: QueueOperation) -> int:
        with self._lock:
            return self._errors[operation]

    def snapshot(self) -> MetricsSnapshot:
        """현재 지표 스냅샷을 반환한다."""

        with self._lock:
            return MetricsSnapshot(
                success={op.value: count for op, count in self._success.items()},
                errors={op.value: count for op, count in self._errors.items()},
                latency={op.value: stats.snapshot() for op, stats in self._latency.items()},
            )
