"""
목적: Redis 기반 타로 해석 태스크 큐를 제공한다.
설명: 태스크 본문은 Redis 리스트에 JSON으로 적재하고 블로킹 팝으로 소비한다.
    상태/결과는 태스크별 문자열 키에 TTL과 함께 저장하며, 적재와 상태 기록은 한 트랜잭션으로 묶는다.
    팝 이후의 확인 응답이나 재전달은 없다. 워커가 팝 직후 죽으면 그 태스크는 유실된다.
디자인 패턴: 어댑터 패턴
참조: src/tarot_reading/core/reading/queue/model.py, src/tarot_reading/core/reading/models/task.py
"""

from __future__ import annotations

import json
import time
from collections.abc import Awaitable
from typing import Any, Optional, Tuple

import redis
from pydantic import ValidationError as PydanticValidationError

from tarot_reading.core.reading.models import TarotTask, TaskProgress, TaskStatus, can_transition
from tarot_reading.core.reading.queue.metrics import QueueMetrics, QueueOperation
from tarot_reading.core.reading.queue.model import QueueConfig
from tarot_reading.shared.const import SharedConst
from tarot_reading.shared.exceptions import (
    BackendUnavailable,
    RateLimited,
    SerializationError,
    ValidationError,
)
from tarot_reading.shared.logging import LogContext, Logger, create_default_logger
from tarot_reading.shared.runtime.limiter import TokenBucket


class RedisTaskQueue:
    """Redis 기반 태스크 큐 구현체.

    Args:
        client: 동기 Redis 클라이언트.
        config: 큐 설정.
        metrics: 지표 수집기. 없으면 새로 만든다.
        logger: 로거.
    """

    def __init__(
        self,
        client: Any,
        config: Optional[QueueConfig] = None,
        metrics: Optional[QueueMetrics] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._client = client
        self._config = config or QueueConfig()
        self._metrics = metrics or QueueMetrics()
        self._logger = logger or create_default_logger("RedisTaskQueue")
        self._limiter: Optional[TokenBucket] = None
        if self._config.rate_limit > 0:
            self._limiter = TokenBucket(self._config.rate_limit, self._config.rate_burst)

    @property
    def config(self) -> QueueConfig:
        """큐 설정을 반환한다."""

        return self._config

    @property
    def metrics(self) -> QueueMetrics:
        """지표 수집기를 반환한다."""

        return self._metrics

    def push(self, task: TarotTask) -> None:
        """태스크를 큐 끝에 적재하고 상태를 `pending`으로 기록한다.

        같은 식별자의 상태 레코드가 이미 있으면 적재하지 않는다.

        Raises:
            RateLimited: 적재 토큰을 제한 시간 안에 얻지 못했을 때.
            SerializationError: 태스크를 JSON으로 인코딩할 수 없을 때.
            ValidationError: 같은 식별자의 태스크가 이미 있을 때.
            BackendUnavailable: Redis 호출이 실패했을 때.
        """

        if self._limiter is not None and not self._limiter.wait(self._config.push_timeout):
            self._metrics.record_error(QueueOperation.PUSH)
            raise RateLimited(
                "큐 적재 유량 제한을 초과했습니다.",
                metadata={"task_id": task.id},
                hint="잠시 후 다시 시도하세요.",
            )
        started = time.monotonic()
        payload = self._encode_task(task)
        status_key = self._config.status_key(task.id)
        try:
            with self._client.pipeline(transaction=True) as pipe:
                while True:
                    try:
                        pipe.watch(status_key)
                        if pipe.exists(status_key):
                            pipe.unwatch()
                            self._metrics.record_error(QueueOperation.PUSH)
                            raise ValidationError(
                                "이미 존재하는 태스크 식별자입니다.",
                                code="TASK_ID_DUPLICATE",
                                metadata={"task_id": task.id},
                            )
                        pipe.multi()
                        pipe.set(
                            status_key,
                            TaskStatus.PENDING.value,
                            ex=self._config.ttl_seconds,
                            nx=True,
                        )
                        pipe.rpush(self._config.tasks_key, payload)
                        pipe.execute()
                        break
                    except redis.WatchError:
                        continue
        except redis.RedisError as error:
            self._metrics.record_error(QueueOperation.PUSH)
            raise BackendUnavailable("태스크 적재에 실패했습니다.", original=error) from error
        finally:
            self._metrics.record_latency(QueueOperation.PUSH, time.monotonic() - started)
        self._metrics.record_success(QueueOperation.PUSH)
        self._logger.debug(
            "태스크를 적재했습니다.",
            LogContext(task_id=task.id, user_id=task.user_id),
        )

    def pop(self, timeout: float = 0) -> Optional[TarotTask]:
        """큐 앞에서 태스크를 꺼낸다.

        `timeout`이 0이면 무기한 대기하고, 시간이 지나면 None을 반환한다.

        Raises:
            SerializationError: 꺼낸 본문을 해석할 수 없을 때. 해당 본문은 버려진다.
            BackendUnavailable: Redis 호출이 실패했을 때.
        """

        started = time.monotonic()
        try:
            result = self._blocking_pop(timeout)
        except redis.RedisError as error:
            self._metrics.record_error(QueueOperation.POP)
            raise BackendUnavailable("태스크 수신에 실패했습니다.", original=error) from error
        if result is None:
            return None
        self._metrics.record_latency(QueueOperation.POP, time.monotonic() - started)
        try:
            task = self._decode_task(result[1])
        except SerializationError:
            self._metrics.record_error(QueueOperation.POP)
            raise
        self._metrics.record_success(QueueOperation.POP)
        return task

    def update_status(self, task_id: str, status: TaskStatus, result: str = "") -> None:
        """상태를 덮어쓰고, `result`가 있으면 결과 레코드도 함께 기록한다.

        두 레코드 모두 TTL을 다시 건다. 상태는 앞으로만 바뀌며 최종 상태는 다른 상태로 바뀌지 않는다.

        Raises:
            ValidationError: 결과 없는 `completed` 기록이나 역방향 전이를 요청했을 때.
            BackendUnavailable: Redis 호출이 실패했을 때.
        """

        status = TaskStatus(status)
        if status == TaskStatus.COMPLETED and not result:
            raise ValidationError(
                "완료 상태에는 결과가 필요합니다.",
                metadata={"task_id": task_id},
            )
        status_key = self._config.status_key(task_id)
        result_key = self._config.result_key(task_id)
        ttl = self._config.ttl_seconds
        try:
            with self._client.pipeline(transaction=True) as pipe:
                while True:
                    try:
                        pipe.watch(status_key)
                        current = self._parse_status(pipe.get(status_key))
                        if not can_transition(current, status):
                            pipe.unwatch()
                            raise ValidationError(
                                "허용되지 않는 상태 전이입니다.",
                                cause=f"{current.value if current else None} -> {status.value}",
                                metadata={"task_id": task_id},
                            )
                        pipe.multi()
                        pipe.set(status_key, status.value, ex=ttl)
                        if result:
                            pipe.set(result_key, result, ex=ttl)
                        pipe.execute()
                        return
                    except redis.WatchError:
                        continue
        except redis.RedisError as error:
            raise BackendUnavailable(
                "태스크 상태 갱신에 실패했습니다.",
                original=error,
                metadata={"task_id": task_id},
            ) from error

    def get_status(self, task_id: str) -> Optional[TaskStatus]:
        """상태를 조회한다. 만료되었거나 없으면 None을 반환한다."""

        try:
            raw = self._client.get(self._config.status_key(task_id))
        except redis.RedisError as error:
            raise BackendUnavailable("태스크 상태 조회에 실패했습니다.", original=error) from error
        return self._parse_status(raw)

    def get_result(self, task_id: str) -> Optional[str]:
        """결과를 조회한다. 만료되었거나 없으면 None을 반환한다."""

        try:
            raw = self._client.get(self._config.result_key(task_id))
        except redis.RedisError as error:
            raise BackendUnavailable("태스크 결과 조회에 실패했습니다.", original=error) from error
        return self._to_text(raw)

    def get_progress(self, task_id: str) -> Optional[TaskProgress]:
        """상태와 (최종 상태일 때) 결과를 묶어 반환한다. 태스크가 없으면 None."""

        status = self.get_status(task_id)
        if status is None:
            return None
        result = self.get_result(task_id) if status.is_terminal else None
        return TaskProgress(task_id=task_id, status=status, result=result)

    def size(self) -> int:
        """대기 중인 태스크 수를 반환한다."""

        try:
            size = self._client.llen(self._config.tasks_key)
        except redis.RedisError as error:
            raise BackendUnavailable("큐 길이 조회에 실패했습니다.", original=error) from error
        try:
            return int(size)
        except (TypeError, ValueError):
            return 0

    def ping(self) -> None:
        """Redis 연결을 확인한다."""

        try:
            self._client.ping()
        except redis.RedisError as error:
            raise BackendUnavailable("Redis 연결에 실패했습니다.", original=error) from error

    def _blocking_pop(self, timeout: float) -> Optional[Tuple[bytes, bytes]]:
        wait_time = max(timeout, 0)
        try:
            result = self._client.blpop([self._config.tasks_key], timeout=wait_time)
        except TypeError:
            wait_time_int = 0 if wait_time == 0 else max(int(wait_time), 1)
            result = self._client.blpop([self._config.tasks_key], timeout=wait_time_int)
        if isinstance(result, Awaitable):
            raise RuntimeError("비동기 Redis 클라이언트는 지원하지 않습니다.")
        if result is None:
            return None
        if not isinstance(result, (list, tuple)) or len(result) < 2:
            raise SerializationError("Redis BLPOP 결과 형식이 올바르지 않습니다.")
        key_raw, value_raw = result[0], result[1]
        key_bytes = key_raw if isinstance(key_raw, bytes) else str(key_raw).encode()
        value_bytes = value_raw if isinstance(value_raw, bytes) else str(value_raw).encode()
        return key_bytes, value_bytes

    def _encode_task(self, task: TarotTask) -> str:
        try:
            return task.model_dump_json()
        except (TypeError, ValueError) as error:
            self._metrics.record_error(QueueOperation.PUSH)
            raise SerializationError(
                "태스크를 JSON으로 직렬화할 수 없습니다.",
                original=error,
                metadata={"task_id": task.id},
            ) from error

    def _decode_task(self, raw: bytes) -> TarotTask:
        try:
            data = json.loads(raw.decode(SharedConst.DEFAULT_ENCODING))
            return TarotTask.model_validate(data)
        except (UnicodeDecodeError, json.JSONDecodeError, PydanticValidationError) as error:
            self._logger.error(f"큐 데이터 디코딩에 실패했습니다: {error}")
            raise SerializationError("큐 데이터 디코딩에 실패했습니다.", original=error) from error

    def _parse_status(self, raw: Any) -> Optional[TaskStatus]:
        text = self._to_text(raw)
        if text is None:
            return None
        try:
            return TaskStatus(text)
        except ValueError:
            self._logger.warning(f"알 수 없는 태스크 상태 값입니다: {text}")
            return None

    def _to_text(self, raw: Any) -> Optional[str]:
        if raw is None:
            return None
        if isinstance(raw, (bytes, bytearray)):
            return bytes(raw).decode(SharedConst.DEFAULT_ENCODING)
        return str(raw)
