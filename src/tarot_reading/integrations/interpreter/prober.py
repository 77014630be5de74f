"""
목적: 백엔드 헬스 프로버를 제공한다.
설명: 주기 작업으로 백엔드 풀의 비정상 인스턴스를 점검한다.
디자인 패턴: 주기 작업 위임
참조: src/tarot_reading/shared/runtime/scheduler/periodic_task.py, src/tarot_reading/integrations/interpreter/pool.py
"""

from __future__ import annotations

from typing import Optional

from tarot_reading.integrations.interpreter.pool import BackendPool
from tarot_reading.shared.logging import Logger, create_default_logger
from tarot_reading.shared.runtime.scheduler import PeriodicTask


class HealthProber(PeriodicTask):
    """비정상 백엔드를 주기적으로 점검하는 작업.

    Args:
        pool: 점검할 백엔드 풀.
        interval: 점검 주기(초).
        logger: 로거.
    """

    def __init__(
        self,
        pool: BackendPool,
        interval: float = 30.0,
        logger: Optional[Logger] = None,
    ) -> None:
        self._pool = pool
        super().__init__(
            name="health-prober",
            interval=interval,
            func=pool.probe_unhealthy,
            logger=logger or create_default_logger("HealthProber"),
        )

    @property
    def pool(self) -> BackendPool:
        """점검 대상 풀을 반환한다."""

        return self._pool
