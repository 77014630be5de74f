"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 하위 공통 모듈에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/exceptions, src/tarot_reading/shared/logging, src/tarot_reading/shared/runtime
"""

from __future__ import annotations

from tarot_reading.shared.config import AppSettings, ConfigLoader, RuntimeEnvironmentLoader
from tarot_reading.shared.exceptions import BaseAppException, ExceptionDetail
from tarot_reading.shared.logging import (
    InMemoryLogger,
    LogContext,
    LogLevel,
    LogRecord,
    Logger,
    LogRepository,
    create_default_logger,
)
from tarot_reading.shared.runtime import (
    PeriodicTask,
    RateLimiterRegistry,
    ReadWriteLock,
    ThreadPool,
    ThreadPoolConfig,
    TokenBucket,
    WorkerConfig,
    WorkerPool,
    WorkerState,
    parse_limit,
)

__all__ = [
    "AppSettings",
    "ConfigLoader",
    "RuntimeEnvironmentLoader",
    "BaseAppException",
    "ExceptionDetail",
    "InMemoryLogger",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "create_default_logger",
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
