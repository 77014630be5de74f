"""
목적: 애플리케이션 의존성 컨텍스트를 제공한다.
설명: 검증된 설정에서 Redis 클라이언트, 태스크 큐, 백엔드 풀, 실행기, 워커풀, 리미터, 주기 작업을 한 번에 조립한다.
    FastAPI lifespan에서 만들어 `app.state.context`에 두며, 모듈 레벨 싱글턴은 쓰지 않는다.
디자인 패턴: 컴포지션 루트, 의존성 주입 컨테이너
참조: src/tarot_reading/api/main.py, src/tarot_reading/shared/config/settings.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from tarot_reading.api.const import LIMITER_CREATE, LIMITER_GLOBAL, LIMITER_QUERY
from tarot_reading.core.reading.models import TarotTask
from tarot_reading.core.reading.queue import QueueConfig, RedisTaskQueue
from tarot_reading.core.reading.services import ReadingTaskExecutor, RetryConfig
from tarot_reading.integrations.interpreter import (
    BackendPool,
    HealthProber,
    InterpretationClient,
    PoolConfig,
)
from tarot_reading.integrations.redis import create_redis_client
from tarot_reading.shared.config import AppSettings
from tarot_reading.shared.logging import InMemoryLogger, Logger
from tarot_reading.shared.runtime.limiter import RateLimiterRegistry
from tarot_reading.shared.runtime.scheduler import PeriodicTask
from tarot_reading.shared.runtime.worker import WorkerConfig, WorkerPool


class AppContext:
    """애플리케이션 의존성 묶음.

    Args:
        settings: 검증된 설정.
        redis_client: 동기 Redis 클라이언트.
        queue: 태스크 큐.
        client: 해석 백엔드 HTTP 클라이언트.
        pool: 해석 백엔드 풀.
        executor: 태스크 실행기.
        worker_pool: 태스크 소비 워커풀.
        prober: 백엔드 헬스 프로버.
        limiters: 이름별 유량 제한 레지스트리.
        sweeper: 유휴 리미터 정리 작업.
        logger: 루트 로거.
        owns_redis: 종료 시 Redis 클라이언트를 닫을지 여부.
    """

    def __init__(
        self,
        settings: AppSettings,
        redis_client: Any,
        queue: RedisTaskQueue,
        client: InterpretationClient,
        pool: BackendPool,
        executor: ReadingTaskExecutor,
        worker_pool: WorkerPool[TarotTask],
        prober: HealthProber,
        limiters: Dict[str, RateLimiterRegistry],
        sweeper: PeriodicTask,
        logger: Logger,
        owns_redis: bool = True,
    ) -> None:
        self.settings = settings
        self.redis_client = redis_client
        self.queue = queue
        self.client = client
        self.pool = pool
        self.executor = executor
        self.worker_pool = worker_pool
        self.prober = prober
        self.limiters = limiters
        self.sweeper = sweeper
        self.logger = logger
        self._owns_redis = owns_redis
        self._started = False

    @classmethod
    def build(
        cls,
        settings: AppSettings,
        redis_client: Optional[Any] = None,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[InMemoryLogger] = None,
    ) -> "AppContext":
        """설정으로 전체 의존성을 조립한다. 주입한 클라이언트는 종료 시 닫지 않는다."""

        root_logger = logger or InMemoryLogger(name="tarot_reading")
        owns_redis = redis_client is None
        resolved_redis = redis_client or create_redis_client(settings.redis_url)

        queue = RedisTaskQueue(
            resolved_redis,
            config=QueueConfig(
                prefix=settings.queue_prefix,
                ttl_seconds=settings.queue_ttl_seconds,
                rate_limit=settings.queue_rate_limit,
                rate_burst=settings.queue_rate_burst,
                push_timeout=settings.queue_push_timeout,
            ),
            logger=root_logger.child("queue"),
        )
        client = InterpretationClient(
            timeout=settings.backend_timeout,
            http_client=http_client,
            logger=root_logger.child("interpreter"),
        )
        pool = BackendPool.from_pairs(
            settings.backend_pairs(),
            client=client,
            config=PoolConfig(
                failure_threshold=settings.failure_threshold,
                load_window_seconds=settings.load_window_seconds,
                probe_timeout=settings.backend_timeout,
            ),
            logger=root_logger.child("backend_pool"),
        )
        if len(pool) == 0:
            root_logger.warning("해석 백엔드가 설정되지 않았습니다. 모든 태스크가 실패로 끝납니다.")

        worker_pool: WorkerPool[TarotTask] = WorkerPool(
            queue.pop,
            config=WorkerConfig(
                name="reading-worker",
                worker_count=settings.worker_count,
                poll_timeout=settings.worker_poll_timeout,
                shutdown_timeout=settings.shutdown_timeout,
            ),
            logger=root_logger.child("worker"),
        )
        executor = ReadingTaskExecutor(
            queue,
            pool,
            client,
            config=RetryConfig(
                max_attempts=settings.retry_times,
                retry_delay=settings.retry_delay,
                attempt_timeout=settings.backend_timeout,
            ),
            cancel_event=worker_pool.stop_event,
            logger=root_logger.child("executor"),
        )
        worker_pool(executor.execute)

        prober = HealthProber(
            pool,
            interval=settings.health_check_interval,
            logger=root_logger.child("prober"),
        )

        limiter_logger = root_logger.child("limiter")
        limiters = {
            name: RateLimiterRegistry(
                settings.resolve_limit(limit),
                burst=settings.limiter_burst,
                logger=limiter_logger,
            )
            for name, limit in (
                (LIMITER_GLOBAL, settings.limit_global),
                (LIMITER_CREATE, settings.limit_create),
                (LIMITER_QUERY, settings.limit_query),
            )
        }
        idle_ttl = settings.limiter_idle_ttl

        def sweep_limiters() -> None:
            for registry in limiters.values():
                registry.cleanup(max_idle=idle_ttl)

        sweeper = PeriodicTask(
            name="limiter-sweeper",
            interval=settings.limiter_sweep_interval,
            func=sweep_limiters,
            logger=limiter_logger,
        )

        return cls(
            settings=settings,
            redis_client=resolved_redis,
            queue=queue,
            client=client,
            pool=pool,
            executor=executor,
            worker_pool=worker_pool,
            prober=prober,
            limiters=limiters,
            sweeper=sweeper,
            logger=root_logger,
            owns_redis=owns_redis,
        )

    def start(self) -> None:
        """백그라운드 작업(워커풀, 프로버, 리미터 정리)을 시작한다."""

        if self._started:
            return
        self.worker_pool.start()
        self.prober.start()
        self.sweeper.start()
        self._started = True
        self.logger.info("애플리케이션 컨텍스트가 시작되었습니다.")

    def stop(self) -> None:
        """백그라운드 작업을 멈추고 클라이언트를 닫는다."""

        if self._started:
            self.worker_pool.stop()
            self.prober.stop()
            self.sweeper.stop()
            self._started = False
        self.client.close()
        if self._owns_redis:
            self.redis_client.close()
        self.logger.info("애플리케이션 컨텍스트가 종료되었습니다.")

    def limiter(self, name: str) -> RateLimiterRegistry:
        """이름으로 유량 제한 레지스트리를 반환한다."""

        return self.limiters[name]
