"""
목적: 로거 인터페이스와 기본 구현체를 제공한다.
설명: 저장소 주입형 로거에 최소 레벨 필터와 JSON 라인 stdout 출력을 더한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/tarot_reading/shared/logging/models.py
"""

from __future__ import annotations

import json
import os
import threading
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional

from tarot_reading.shared.logging.models import LogContext, LogLevel, LogRecord


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 반환한다."""


class InMemoryLogRepository(LogRepository):
    """인메모리 로그 저장소 구현체.

    워커 스레드가 장시간 기록하므로 최근 `max_records`건만 보관한다.
    """

    def __init__(self, max_records: int = 10000) -> None:
        self._records: Deque[LogRecord] = deque(maxlen=max(1, max_records))
        self._lock = threading.Lock()

    def add(self, record: LogRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list(self) -> List[LogRecord]:
        with self._lock:
            return list(self._records)


class Logger(ABC):
    """로거 인터페이스."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 새 로거를 반환한다."""

    def debug(self, message: str, context: Optional[LogContext] = None) -> None:
        """DEBUG 레벨 로그를 기록한다."""

        self.log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[LogContext] = None) -> None:
        """INFO 레벨 로그를 기록한다."""

        self.log(LogLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[LogContext] = None) -> None:
        """WARNING 레벨 로그를 기록한다."""

        self.log(LogLevel.WARNING, message, context)

    def error(self, message: str, context: Optional[LogContext] = None) -> None:
        """ERROR 레벨 로그를 기록한다."""

        self.log(LogLevel.ERROR, message, context)

    def critical(self, message: str, context: Optional[LogContext] = None) -> None:
        """CRITICAL 레벨 로그를 기록한다."""

        self.log(LogLevel.CRITICAL, message, context)


class InMemoryLogger(Logger):
    """인메모리 로거 구현체."""

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
        emit_stdout: Optional[bool] = None,
        min_level: Optional[LogLevel] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context
        self._emit_stdout = _read_emit_stdout_env() if emit_stdout is None else emit_stdout
        self._min_level = min_level or _read_min_level_env()

    @property
    def name(self) -> str:
        """로거 이름을 반환한다."""

        return self._name

    @property
    def repository(self) -> LogRepository:
        """저장소를 반환한다."""

        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        if level.severity < self._min_level.severity:
            return
        merged_context = self._merge_context(context)
        record = LogRecord(
            level=level,
            message=message,
            timestamp=datetime.now(timezone.utc),
            logger_name=self._name,
            context=merged_context,
            metadata=metadata or {},
        )
        self._repository.add(record)
        if self._emit_stdout:
            self._write_stdout(record)

    def with_context(self, context: LogContext) -> "Logger":
        merged = self._merge_context(context)
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=merged,
            emit_stdout=self._emit_stdout,
            min_level=self._min_level,
        )

    def child(self, name: str) -> "InMemoryLogger":
        """저장소와 출력 설정을 공유하는 하위 로거를 반환한다."""

        return InMemoryLogger(
            name=f"{self._name}.{name}",
            repository=self._repository,
            base_context=self._base_context,
            emit_stdout=self._emit_stdout,
            min_level=self._min_level,
        )

    def _merge_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        if context is None:
            return self._base_context
        base = self._base_context
        return LogContext(
            request_id=context.request_id or base.request_id,
            task_id=context.task_id or base.task_id,
            worker_id=context.worker_id or base.worker_id,
            backend_url=context.backend_url or base.backend_url,
            user_id=context.user_id or base.user_id,
            tags={**base.tags, **context.tags},
        )

    def _write_stdout(self, record: LogRecord) -> None:
        payload: dict[str, object] = {
            "timestamp": record.timestamp.astimezone(timezone.utc).isoformat(),
            "level": record.level.value,
            "logger": record.logger_name,
            "message": record.message,
        }
        if record.context is not None:
            payload["context"] = record.context.model_dump(exclude_none=True)
        if record.metadata:
            payload["metadata"] = record.metadata
        print(json.dumps(payload, ensure_ascii=False, default=str), flush=True)


def _read_emit_stdout_env() -> bool:
    raw = os.getenv("LOG_STDOUT")
    if raw is None:
        return False
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _read_min_level_env() -> LogLevel:
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    try:
        return LogLevel(raw)
    except ValueError:
        return LogLevel.DEBUG


def create_default_logger(name: str) -> InMemoryLogger:
    """기본 인메모리 로거를 생성한다."""

    return InMemoryLogger(name=name)
