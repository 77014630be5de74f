"""
목적: 타로 해석 태스크 실행기를 제공한다.
설명: 큐에서 꺼낸 태스크를 `running`으로 기록한 뒤, 백엔드 풀에서 인스턴스를 골라 해석을 요청한다.
    실패하면 정해진 간격으로 최대 시도 횟수까지 다시 시도하고, 취소나 마감 초과는 즉시 중단한다.
    최종 결과(`completed` + 해석 또는 `failed` + 마지막 오류)는 큐의 상태/결과 레코드에 남긴다.
디자인 패턴: 템플릿 메서드, 재시도 정책
참조: src/tarot_reading/core/reading/queue/redis_task_queue.py, src/tarot_reading/integrations/interpreter/pool.py,
    src/tarot_reading/shared/runtime/worker/worker_pool.py
"""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, Field

from tarot_reading.core.reading.models import CallContext, TarotTask, TaskStatus, utc_now
from tarot_reading.core.reading.queue import QueueMetrics, QueueOperation, RedisTaskQueue
from tarot_reading.integrations.interpreter import BackendPool, InterpretationClient
from tarot_reading.shared.exceptions import (
    BackendUnavailable,
    BaseAppException,
    FatalCancellation,
    ValidationError,
)
from tarot_reading.shared.logging import LogContext, Logger, create_default_logger


class RetryConfig(BaseModel):
    """재시도 설정 모델이다.

    Args:
        max_attempts: 전체 시도 횟수(첫 시도 포함).
        retry_delay: 시도 사이 대기 시간(초).
        attempt_timeout: 시도 1회의 백엔드 호출 제한 시간(초).
    """

    max_attempts: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=5.0, ge=0)
    attempt_timeout: float = Field(default=30.0, gt=0)


class ReadingTaskExecutor:
    """타로 해석 태스크 실행기.

    Args:
        queue: 상태/결과를 기록할 태스크 큐.
        pool: 해석 백엔드 풀.
        client: 해석 백엔드 HTTP 클라이언트.
        config: 재시도 설정.
        cancel_event: 종료 신호. 설정되면 진행 중인 태스크는 다음 확인 시점에 중단된다.
        logger: 로거.
    """

    def __init__(
        self,
        queue: RedisTaskQueue,
        pool: BackendPool,
        client: InterpretationClient,
        config: Optional[RetryConfig] = None,
        cancel_event: Optional[threading.Event] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._queue = queue
        self._pool = pool
        self._client = client
        self._config = config or RetryConfig()
        self._cancel_event = cancel_event or threading.Event()
        self._logger = logger or create_default_logger("ReadingTaskExecutor")

    @property
    def config(self) -> RetryConfig:
        """재시도 설정을 반환한다."""

        return self._config

    @property
    def metrics(self) -> QueueMetrics:
        """처리 지표가 기록되는 수집기를 반환한다."""

        return self._queue.metrics

    def __call__(self, task: TarotTask) -> Optional[TaskStatus]:
        """워커풀 핸들러로 쓰기 위한 별칭."""

        return self.execute(task)

    def build_context(self, task: TarotTask) -> CallContext:
        """태스크 마감(생성 시각 + 큐 TTL)과 종료 신호를 담은 컨텍스트를 만든다."""

        expires_at = task.created_at + timedelta(seconds=self._queue.config.ttl_seconds)
        remaining = (expires_at - utc_now()).total_seconds()
        return CallContext.with_timeout(remaining, cancel_event=self._cancel_event)

    def execute(self, task: TarotTask, context: Optional[CallContext] = None) -> Optional[TaskStatus]:
        """태스크 한 건을 처리하고 기록한 최종 상태를 반환한다.

        `running` 기록에 실패하면 처리를 건너뛰고 None을 반환한다.
        """

        log_context = LogContext(task_id=task.id, user_id=task.user_id)
        ctx = context or self.build_context(task)
        started = time.monotonic()
        try:
            self._queue.update_status(task.id, TaskStatus.RUNNING)
        except ValidationError as error:
            self._logger.warning(f"이미 종료된 태스크라 건너뜁니다: {error}", log_context)
            return None
        except BackendUnavailable as error:
            self.metrics.record_error(QueueOperation.PROCESS)
            self._logger.error(f"태스크 상태 갱신 실패로 처리를 건너뜁니다: {error}", log_context)
            return None

        try:
            answer = self._process(task, ctx, log_context)
        except BaseAppException as error:
            self.metrics.record_error(QueueOperation.PROCESS)
            self._record(task.id, TaskStatus.FAILED, error.describe(), log_context)
            return TaskStatus.FAILED
        finally:
            self.metrics.record_latency(QueueOperation.PROCESS, time.monotonic() - started)

        self.metrics.record_success(QueueOperation.PROCESS)
        self._record(task.id, TaskStatus.COMPLETED, answer, log_context)
        self._logger.info("태스크가 완료되었습니다.", log_context)
        return TaskStatus.COMPLETED

    def _process(self, task: TarotTask, ctx: CallContext, log_context: LogContext) -> str:
        max_attempts = self._config.max_attempts
        last_error: Optional[Exception] = None
        for attempt in range(1, max_attempts + 1):
            if attempt > 1:
                self._logger.info(f"태스크 재시도: attempt={attempt}/{max_attempts}", log_context)
                if not ctx.sleep(self._config.retry_delay):
                    raise FatalCancellation(
                        "재시도 대기 중 태스크가 취소되었습니다.",
                        cause=self._describe(last_error),
                        metadata={"task_id": task.id, "attempt": attempt},
                    )
            self._ensure_active(task, ctx, attempt, last_error)
            try:
                return self._attempt(task, ctx)
            except FatalCancellation:
                raise
            except Exception as error:  # noqa: BLE001 - 취소 외 오류는 모두 재시도 대상
                last_error = error
                self._logger.warning(
                    f"태스크 시도 실패: attempt={attempt}/{max_attempts}, error={error}",
                    log_context,
                )
        raise BackendUnavailable(
            f"태스크가 {max_attempts}회 시도 후 실패했습니다.",
            cause=self._describe(last_error),
            original=last_error,
            metadata={"task_id": task.id, "attempts": max_attempts},
        )

    def _attempt(self, task: TarotTask, ctx: CallContext) -> str:
        instance = self._pool.get_healthy_instance()
        timeout = ctx.bound(self._config.attempt_timeout)
        try:
            answer = self._client.interpret(
                instance,
                question=task.question,
                cards=task.cards,
                user=task.id,
                timeout=timeout,
            )
        except BackendUnavailable as error:
            self._pool.mark_failure(instance, error)
            if ctx.is_cancelled() or ctx.is_expired():
                raise FatalCancellation(
                    "백엔드 호출 중 태스크가 취소되었거나 마감되었습니다.",
                    cause=error.describe(),
                    original=error,
                    metadata={"task_id": task.id},
                ) from error
            raise
        self._pool.mark_success(instance)
        return answer

    def _ensure_active(
        self,
        task: TarotTask,
        ctx: CallContext,
        attempt: int,
        last_error: Optional[Exception],
    ) -> None:
        if ctx.is_cancelled():
            raise FatalCancellation(
                "태스크가 취소되었습니다.",
                cause=self._describe(last_error),
                metadata={"task_id": task.id, "attempt": attempt},
            )
        if ctx.is_expired():
            raise FatalCancellation(
                "태스크 마감 시각이 지났습니다.",
                cause=self._describe(last_error),
                metadata={"task_id": task.id, "attempt": attempt},
            )

    def _record(self, task_id: str, status: TaskStatus, result: str, log_context: LogContext) -> None:
        try:
            self._queue.update_status(task_id, status, result)
        except BaseAppException as error:
            self._logger.error(f"태스크 최종 상태 기록 실패: status={status.value}, error={error}", log_context)

    def _describe(self, error: Optional[Exception]) -> Optional[str]:
        if error is None:
            return None
        if isinstance(error, BaseAppException):
            return error.describe()
        return f"{type(error).__name__}: {error}"
