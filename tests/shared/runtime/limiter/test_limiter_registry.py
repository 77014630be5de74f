"""
목적: 키별 리미터 레지스트리를 검증한다.
설명: 키 단위 분리, 판정 정보, 유휴 키 정리, 잘못된 제한 표기의 통과 처리를 확인한다.
디자인 패턴: 레지스트리, 우아한 성능 저하
참조: src/tarot_reading/shared/runtime/limiter/registry.py
"""

from __future__ import annotations

import itertools
import threading
import time

from tarot_reading.shared.logging import InMemoryLogger, LogLevel
from tarot_reading.shared.runtime.limiter import RateLimiterRegistry


class FakeClock:
    """수동으로 흐르는 단조 시계."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_keys_are_limited_independently() -> None:
    """키마다 버킷이 따로 만들어지는지 검증한다."""

    registry = RateLimiterRegistry("1-H", burst=2, clock=FakeClock())

    assert registry.allow("10.0.0.1") is True
    assert registry.allow("10.0.0.1") is True
    assert registry.allow("10.0.0.1") is False
    assert registry.allow("10.0.0.2") is True
    assert len(registry) == 2


def test_check_reports_header_values() -> None:
    """판정 결과에 한도와 남은 토큰이 담기는지 검증한다."""

    registry = RateLimiterRegistry("5-S", burst=3, clock=FakeClock())

    decision = registry.check("client")

    assert decision.allowed is True
    assert decision.limit == 5.0
    assert decision.remaining == 2.0
    assert decision.reset_at > 0


def test_cleanup_removes_idle_keys() -> None:
    """최대 유휴 시간을 넘긴 키만 제거되는지 검증한다."""

    clock = FakeClock()
    registry = RateLimiterRegistry("10-S", burst=1, clock=clock)
    registry.allow("old")
    clock.now = 100.0
    registry.allow("fresh")

    clock.now = 150.0
    removed = registry.cleanup(max_idle=60.0)

    assert removed == 1
    assert len(registry) == 1
    assert registry.cleanup(max_idle=60.0) == 0


def test_concurrent_first_access_creates_single_bucket() -> None:
    """같은 키를 동시에 처음 조회해도 버킷이 하나만 남는지 검증한다."""

    registry = RateLimiterRegistry("1-H", burst=5)
    barrier = threading.Barrier(10)
    results: list[bool] = []
    lock = threading.Lock()

    def hit() -> None:
        barrier.wait()
        allowed = registry.allow("same-key")
        with lock:
            results.append(allowed)

    threads = [threading.Thread(target=hit) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert len(registry) == 1
    assert results.count(True) == 5


def test_cleanup_during_access_leaves_no_orphan_buckets() -> None:
    """접근과 정리가 겹쳐도 이후 정리에서 모든 버킷이 제거되는지 검증한다."""

    ticks = itertools.count()
    registry = RateLimiterRegistry("1000-S", burst=5, clock=lambda: float(next(ticks)))
    stop = threading.Event()

    def hit(worker: int) -> None:
        while not stop.is_set():
            registry.allow(f"10.0.0.{worker % 4}")

    def sweep() -> None:
        while not stop.is_set():
            registry.cleanup(max_idle=0)

    threads = [threading.Thread(target=hit, args=(index,)) for index in range(4)]
    threads.append(threading.Thread(target=sweep))
    for thread in threads:
        thread.start()
    time.sleep(0.2)
    stop.set()
    for thread in threads:
        thread.join(timeout=5)

    registry.cleanup(max_idle=0)

    assert len(registry) == 0


def test_malformed_limit_allows_traffic_and_logs_once() -> None:
    """잘못된 제한 표기면 오류를 한 번 기록하고 모든 요청을 통과시키는지 검증한다."""

    logger = InMemoryLogger(name="unit", emit_stdout=False)
    registry = RateLimiterRegistry("lots-per-hour", logger=logger)

    assert registry.enabled is False
    assert all(registry.allow("client") for _ in range(1000))
    decision = registry.check("client")
    assert decision.allowed is True
    assert decision.limit is None

    errors = [record for record in logger.repository.list() if record.level == LogLevel.ERROR]
    assert len(errors) == 1
