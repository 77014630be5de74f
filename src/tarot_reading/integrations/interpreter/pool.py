"""
목적: 해석 백엔드 풀(부하 분산기)을 제공한다.
설명: 정상 인스턴스 중 최근 요청 수가 가장 적은 인스턴스를 고르고, 연속 실패가 임계치에 닿으면 비정상으로 뺀다.
    정상 인스턴스가 하나도 없으면 전체를 정상으로 되돌리고(fail-open) 첫 인스턴스를 반환한다.
    비정상 인스턴스는 헬스 프로브가 200을 받으면 즉시 복귀한다.
디자인 패턴: 부하 분산기, 서킷 브레이커(단순형)
참조: src/tarot_reading/integrations/interpreter/model.py, src/tarot_reading/integrations/interpreter/prober.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from tarot_reading.integrations.interpreter.client import InterpretationClient
from tarot_reading.integrations.interpreter.model import BackendInstance, BackendSnapshot, PoolConfig
from tarot_reading.shared.exceptions import NoBackendAvailable
from tarot_reading.shared.logging import LogContext, Logger, create_default_logger
from tarot_reading.shared.runtime.lock import ReadWriteLock


class BackendPool:
    """해석 백엔드 인스턴스 풀.

    Args:
        instances: 관리할 인스턴스 목록. 순서가 동점 처리 순서다.
        client: 헬스 프로브에 쓰는 HTTP 클라이언트.
        config: 풀 설정.
        logger: 로거.
    """

    def __init__(
        self,
        instances: Iterable[BackendInstance],
        client: Optional[InterpretationClient] = None,
        config: Optional[PoolConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._instances: List[BackendInstance] = list(instances)
        self._client = client
        self._config = config or PoolConfig()
        self._logger = logger or create_default_logger("BackendPool")
        self._lock = ReadWriteLock()

    @classmethod
    def from_pairs(
        cls,
        pairs: Sequence[Tuple[str, str]],
        client: Optional[InterpretationClient] = None,
        config: Optional[PoolConfig] = None,
        logger: Optional[Logger] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "BackendPool":
        """(URL, API 키) 쌍 목록으로 풀을 만든다."""

        resolved = config or PoolConfig()
        instances = [
            BackendInstance(url, key, resolved.load_window_seconds, clock=clock)
            for url, key in pairs
        ]
        return cls(instances, client=client, config=resolved, logger=logger)

    @property
    def config(self) -> PoolConfig:
        """풀 설정을 반환한다."""

        return self._config

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._instances)

    def get_healthy_instance(self) -> BackendInstance:
        """요청을 보낼 인스턴스를 골라 요청 1건을 기록한 뒤 반환한다.

        Raises:
            NoBackendAvailable: 인스턴스가 하나도 없을 때.
        """

        with self._lock.write():
            if not self._instances:
                raise NoBackendAvailable("설정된 해석 백엔드가 없습니다.")
            selected: Optional[BackendInstance] = None
            selected_load = 0
            for instance in self._instances:
                if not instance.healthy:
                    continue
                load = instance.requests.count()
                if selected is None or load < selected_load:
                    selected = instance
                    selected_load = load
            if selected is None:
                self._logger.warning("정상 백엔드가 없어 전체 인스턴스를 정상으로 재설정합니다.")
                for instance in self._instances:
                    instance.healthy = True
                    instance.error_count = 0
                selected = self._instances[0]
            selected.requests.add()
            return selected

    def get_available_instance(self) -> BackendInstance:
        """`get_healthy_instance`와 같다."""

        return self.get_healthy_instance()

    def mark_success(self, instance: BackendInstance) -> None:
        """성공을 기록해 인스턴스를 정상으로 되돌린다."""

        with self._lock.write():
            recovered = not instance.healthy
            instance.healthy = True
            instance.error_count = 0
            instance.last_error = None
            instance.last_used = datetime.now(timezone.utc)
        if recovered:
            self._logger.info("백엔드가 정상으로 복귀했습니다.", LogContext(backend_url=instance.url))

    def mark_failure(self, instance: BackendInstance, error: Union[BaseException, str]) -> None:
        """실패를 기록한다. 연속 실패가 임계치 이상이면 비정상으로 표시한다."""

        message = str(error)
        with self._lock.write():
            instance.error_count += 1
            instance.last_error = message
            became_unhealthy = (
                instance.healthy and instance.error_count >= self._config.failure_threshold
            )
            if instance.error_count >= self._config.failure_threshold:
                instance.healthy = False
            error_count = instance.error_count
        context = LogContext(backend_url=instance.url)
        if became_unhealthy:
            self._logger.error(
                f"백엔드를 비정상으로 표시합니다: errors={error_count}, error={message}",
                context,
            )
        else:
            self._logger.warning(
                f"백엔드 호출 실패를 기록했습니다: errors={error_count}, error={message}",
                context,
            )

    def probe_unhealthy(self) -> int:
        """비정상 인스턴스에 헬스 프로브를 보내고 복귀한 인스턴스 수를 반환한다."""

        if self._client is None:
            return 0
        with self._lock.read():
            targets = [instance for instance in self._instances if not instance.healthy]
        recovered = 0
        for instance in targets:
            # 프로브 중에는 잠금을 잡지 않는다.
            if not self._client.probe(instance, timeout=self._config.probe_timeout):
                continue
            with self._lock.write():
                instance.healthy = True
                instance.error_count = 0
                instance.last_error = None
            recovered += 1
            self._logger.info("헬스 프로브로 백엔드가 복구되었습니다.", LogContext(backend_url=instance.url))
        return recovered

    def health_check(self) -> None:
        """정상 인스턴스가 하나라도 있는지 확인한다.

        Raises:
            NoBackendAvailable: 정상 인스턴스가 없을 때. 마지막 오류를 원인으로 싣는다.
        """

        with self._lock.read():
            last_error: Optional[str] = None
            for instance in self._instances:
                if instance.healthy:
                    return
                if instance.last_error:
                    last_error = instance.last_error
        raise NoBackendAvailable("정상 해석 백엔드가 없습니다.", cause=last_error)

    def snapshot(self) -> List[BackendSnapshot]:
        """인스턴스별 상태를 API 키 없이 반환한다."""

        with self._lock.read():
            return [
                BackendSnapshot(
                    url=instance.url,
                    healthy=instance.healthy,
                    error_count=instance.error_count,
                    last_error=instance.last_error,
                    last_used=instance.last_used,
                    recent_request_count=instance.requests.count(),
                )
                for instance in self._instances
            ]
