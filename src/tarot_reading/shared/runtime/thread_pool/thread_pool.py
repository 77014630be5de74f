"""
목적: 스레드풀 실행기를 제공한다.
설명: with 문을 지원하며, 제출한 Future를 추적해 제한 시간 내 종료를 기다린다.
디자인 패턴: 파사드, 커맨드 패턴
참조: src/tarot_reading/shared/runtime/thread_pool/model.py, src/tarot_reading/shared/runtime/worker/worker_pool.py
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, TypeVar

from tarot_reading.shared.logging import Logger, create_default_logger
from tarot_reading.shared.runtime.thread_pool.model import ShutdownReport, ThreadPoolConfig

T = TypeVar("T")


class ThreadPool:
    """스레드풀 실행기 구현체."""

    def __init__(
        self,
        config: Optional[ThreadPoolConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config or ThreadPoolConfig()
        self._logger = logger or create_default_logger("ThreadPool")
        self._executor: Optional[ThreadPoolExecutor] = None
        self._futures: List[Future] = []
        self._lock = threading.RLock()

    @property
    def config(self) -> ThreadPoolConfig:
        """스레드풀 설정을 반환한다."""

        return self._config

    def __enter__(self) -> "ThreadPool":
        """with 문 진입 시 실행기를 생성한다."""

        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._config.max_workers,
                    thread_name_prefix=self._config.thread_name_prefix,
                )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """with 문 종료 시 실행기를 종료한다."""

        self.shutdown(wait=True)

    def submit(self, fn: Callable[..., T], *args, **kwargs) -> Future[T]:
        """태스크를 제출한다."""

        with self._lock:
            if self._executor is None:
                self.__enter__()
            if self._executor is None:
                raise RuntimeError("스레드풀이 초기화되지 않았습니다.")
            future = self._executor.submit(fn, *args, **kwargs)
            self._futures.append(future)
            future.add_done_callback(self._on_future_done)
            return future

    def pending(self) -> int:
        """아직 끝나지 않은 태스크 수를 반환한다."""

        with self._lock:
            return len(self._futures)

    def wait_all(self, timeout: Optional[float] = None) -> ShutdownReport:
        """추적 중인 태스크가 끝날 때까지 최대 `timeout`초 기다린다."""

        with self._lock:
            futures = list(self._futures)
        if not futures:
            return ShutdownReport()
        done, not_done = wait(futures, timeout=timeout)
        return ShutdownReport(
            completed=len(done),
            pending=len(not_done),
            timed_out=bool(not_done),
        )

    def shutdown(self, wait: bool = True, timeout: Optional[float] = None) -> ShutdownReport:
        """스레드풀을 종료한다.

        `timeout`이 주어지면 그 시간만큼만 기다리고, 남은 스레드는 계속 실행되도록 둔 채 반환한다.
        """

        report = ShutdownReport()
        if wait and timeout is not None:
            report = self.wait_all(timeout=timeout)
        with self._lock:
            if self._executor is None:
                return report
            executor = self._executor
            self._executor = None
        executor.shutdown(wait=wait and not report.timed_out and timeout is None)
        self._logger.info("스레드풀이 종료되었습니다.")
        return report

    def _on_future_done(self, future: Future) -> None:
        """완료된 Future를 추적 목록에서 제거한다."""

        with self._lock:
            try:
                self._futures.remove(future)
            except ValueError:
                return
