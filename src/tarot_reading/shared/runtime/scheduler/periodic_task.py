"""
목적: 주기 실행 백그라운드 작업을 제공한다.
설명: 전용 스레드에서 함수를 일정 간격으로 호출하며, 중지 신호를 받으면 다음 주기를 기다리지 않고 끝낸다.
    한 번의 실행이 실패해도 다음 주기는 계속된다.
디자인 패턴: 템플릿 메서드
참조: src/tarot_reading/shared/runtime/worker/worker_pool.py
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from tarot_reading.shared.logging import Logger, create_default_logger


class PeriodicTask:
    """주기 실행 작업 구현체.

    Args:
        name: 작업 이름. 스레드 이름으로도 쓴다.
        interval: 실행 간격(초).
        func: 매 주기 호출할 함수.
        logger: 로거.
        run_immediately: 시작 직후 한 번 실행할지 여부.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        func: Callable[[], object],
        logger: Optional[Logger] = None,
        run_immediately: bool = False,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval은 0보다 커야 합니다.")
        self._name = name
        self._interval = interval
        self._func = func
        self._logger = logger or create_default_logger(name)
        self._run_immediately = run_immediately
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._runs = 0

    @property
    def name(self) -> str:
        """작업 이름을 반환한다."""

        return self._name

    @property
    def runs(self) -> int:
        """지금까지 실행한 횟수를 반환한다."""

        return self._runs

    def is_running(self) -> bool:
        """스레드가 살아 있는지 반환한다."""

        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """작업 스레드를 시작한다."""

        if self.is_running():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name=self._name, daemon=True)
        self._thread.start()
        self._logger.info(f"주기 작업이 시작되었습니다: interval={self._interval}s")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """작업을 중지하고 스레드 종료를 기다린다."""

        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                self._logger.warning("주기 작업이 제한 시간 내에 종료되지 않았습니다.")
        self._thread = None
        self._logger.info("주기 작업이 중지되었습니다.")

    def run_once(self) -> None:
        """한 주기를 즉시 실행한다."""

        try:
            self._func()
        except Exception as error:  # noqa: BLE001 - 다음 주기를 위해 포괄 처리
            self._logger.error(f"주기 작업 실행 실패: {error}")
        finally:
            self._runs += 1

    def __enter__(self) -> "PeriodicTask":
        """with 문 진입 시 작업을 시작한다."""

        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """with 문 종료 시 작업을 중지한다."""

        self.stop()

    def _loop(self) -> None:
        if self._run_immediately:
            self.run_once()
        while not self._stop_event.wait(self._interval):
            self.run_once()
