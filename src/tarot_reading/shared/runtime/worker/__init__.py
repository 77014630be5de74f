"""
목적: 워커풀 공개 API를 제공한다.
설명: 워커풀과 설정/상태 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/runtime/worker/worker_pool.py
"""

from tarot_reading.shared.runtime.worker.model import WorkerConfig, WorkerState
from tarot_reading.shared.runtime.worker.worker_pool import WorkerPool

__all__ = ["WorkerPool", "WorkerConfig", "WorkerState"]
