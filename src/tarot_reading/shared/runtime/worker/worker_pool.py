"""
목적: 큐 소비용 워커풀을 제공한다.
설명: 고정 개수의 소비 루프를 스레드풀에서 실행하며, 데코레이터와 with 문을 모두 지원한다.
    핸들러 예외는 기록만 하고 루프는 계속 돈다. 종료는 제한 시간까지만 기다린다.
디자인 패턴: 템플릿 메서드, 커맨드 패턴
참조: src/tarot_reading/shared/runtime/thread_pool/thread_pool.py, src/tarot_reading/shared/runtime/worker/model.py
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

from tarot_reading.shared.logging import LogContext, Logger, create_default_logger
from tarot_reading.shared.runtime.thread_pool import ThreadPool, ThreadPoolConfig
from tarot_reading.shared.runtime.worker.model import WorkerConfig, WorkerState

T = TypeVar("T")

Source = Callable[[float], Optional[T]]
Handler = Callable[[T], None]


class WorkerPool(Generic[T]):
    """소스에서 아이템을 꺼내 핸들러로 넘기는 워커풀 구현체.

    Args:
        source: `timeout`초 동안 아이템을 기다렸다가 반환하는 함수. 없으면 None을 반환한다.
        config: 워커풀 설정.
        logger: 로거.
    """

    def __init__(
        self,
        source: Source,
        config: Optional[WorkerConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._source = source
        self._config = config or WorkerConfig()
        self._logger = logger or create_default_logger(self._config.name)
        self._handler: Optional[Handler] = None
        self._pool: Optional[ThreadPool] = None
        self._stop_event = threading.Event()
        self._state = WorkerState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> WorkerState:
        """현재 워커풀 상태를 반환한다."""

        return self._state

    @property
    def stop_event(self) -> threading.Event:
        """종료 신호 이벤트를 반환한다. 핸들러는 이 이벤트로 취소를 감지한다."""

        return self._stop_event

    def __call__(self, handler: Handler) -> Handler:
        """데코레이터로 핸들러를 등록한다."""

        self._handler = handler
        return handler

    def start(self) -> None:
        """소비 루프들을 시작한다."""

        with self._lock:
            if self._state == WorkerState.RUNNING:
                return
            if self._handler is None:
                raise ValueError("워커 핸들러가 등록되지 않았습니다.")
            self._stop_event.clear()
            self._pool = ThreadPool(
                ThreadPoolConfig(
                    max_workers=self._config.worker_count,
                    thread_name_prefix=self._config.name,
                ),
                logger=self._logger,
            )
            for worker_id in range(self._config.worker_count):
                self._pool.submit(self._run, worker_id)
            self._state = WorkerState.RUNNING
        self._logger.info(f"워커풀이 시작되었습니다: workers={self._config.worker_count}")

    def stop(self) -> bool:
        """워커풀을 중지한다.

        Returns:
            bool: 제한 시간 안에 모든 루프가 끝났으면 True.
        """

        with self._lock:
            if self._pool is None:
                self._state = WorkerState.STOPPED
                return True
            pool = self._pool
            self._pool = None
            self._state = WorkerState.STOPPING
        self._stop_event.set()
        report = pool.shutdown(wait=True, timeout=self._config.shutdown_timeout)
        self._state = WorkerState.STOPPED
        if report.timed_out:
            self._logger.warning(
                "워커풀 종료 대기 시간이 초과되었습니다: "
                f"timeout={self._config.shutdown_timeout}s, pending={report.pending}"
            )
            return False
        self._logger.info("워커풀이 중지되었습니다.")
        return True

    def __enter__(self) -> "WorkerPool[T]":
        """with 문 진입 시 워커풀을 시작한다."""

        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """with 문 종료 시 워커풀을 중지한다."""

        self.stop()

    def _run(self, worker_id: int) -> None:
        logger = self._logger.with_context(LogContext(worker_id=f"{self._config.name}-{worker_id}"))
        logger.info("워커가 시작되었습니다.")
        while not self._stop_event.is_set():
            try:
                item = self._source(self._config.poll_timeout)
            except Exception as error:  # noqa: BLE001 - 루프 유지를 위해 포괄 처리
                logger.error(f"아이템 수신 실패: {error}")
                self._stop_event.wait(self._config.poll_timeout)
                continue
            if item is None:
                continue
            self._process_item(item, logger)
        logger.info("워커가 중지되었습니다.")

    def _process_item(self, item: T, logger: Logger) -> None:
        try:
            if self._handler is None:
                raise ValueError("워커 핸들러가 없습니다.")
            self._handler(item)
        except Exception as error:  # noqa: BLE001 - 로깅을 위해 포괄 처리
            logger.error(f"워커 처리 실패: {error}")
