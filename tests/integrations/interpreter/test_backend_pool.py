"""
목적: 해석 백엔드 풀(부하 분산기)을 검증한다.
설명: 3회 실패 비정상 판정, 성공 시 복귀, 최소 부하 선택, 정상 인스턴스가 없을 때의 fail-open,
    헬스 프로브 복구, 준비 상태 점검, 스냅샷의 비밀 키 제외를 확인한다.
디자인 패턴: 부하 분산기
참조: src/tarot_reading/integrations/interpreter/pool.py, src/tarot_reading/integrations/interpreter/sliding_window.py
"""

from __future__ import annotations

import pytest

from tarot_reading.integrations.interpreter import (
    BackendPool,
    InterpretationClient,
    PoolConfig,
    SlidingWindowCounter,
)
from tarot_reading.shared.exceptions import NoBackendAvailable


class FakeClock:
    """수동으로 흐르는 단조 시계."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _pool(count: int = 2, client=None, clock=None, **config) -> BackendPool:
    pairs = [(f"http://b{index}.test", f"key-{index}") for index in range(1, count + 1)]
    return BackendPool.from_pairs(pairs, client=client, config=PoolConfig(**config), clock=clock)


def test_three_failures_mark_unhealthy() -> None:
    """연속 3회 실패에서 비정상이 되는지 검증한다."""

    pool = _pool(1)
    instance = pool.get_healthy_instance()

    pool.mark_failure(instance, "timeout")
    pool.mark_failure(instance, "timeout")
    assert instance.healthy is True

    pool.mark_failure(instance, "timeout")
    assert instance.healthy is False
    assert instance.error_count == 3
    assert instance.last_error == "timeout"


def test_success_resets_errors() -> None:
    """성공하면 오류 카운트가 0이 되고 정상으로 돌아오는지 검증한다."""

    pool = _pool(1)
    instance = pool.get_healthy_instance()
    for _ in range(3):
        pool.mark_failure(instance, "boom")

    pool.mark_success(instance)

    assert instance.healthy is True
    assert instance.error_count == 0
    assert instance.last_error is None
    assert instance.last_used is not None


def test_selects_least_loaded_healthy_instance() -> None:
    """최근 요청 수가 가장 적은 정상 인스턴스를 고르는지 검증한다."""

    pool = _pool(3, clock=FakeClock())

    picks = [pool.get_healthy_instance().url for _ in range(4)]

    assert picks == ["http://b1.test", "http://b2.test", "http://b3.test", "http://b1.test"]


def test_unhealthy_instances_are_skipped() -> None:
    """비정상 인스턴스를 건너뛰는지 검증한다."""

    pool = _pool(2, clock=FakeClock())
    first = pool.get_healthy_instance()
    for _ in range(3):
        pool.mark_failure(first, "down")

    assert {pool.get_healthy_instance().url for _ in range(3)} == {"http://b2.test"}


def test_load_window_expires_old_requests() -> None:
    """창 밖으로 밀려난 요청은 부하로 세지 않는지 검증한다."""

    clock = FakeClock()
    pool = _pool(2, clock=clock, load_window_seconds=300)
    pool.get_healthy_instance()
    pool.get_healthy_instance()
    pool.get_healthy_instance()

    clock.now += 301
    snapshot = pool.snapshot()

    assert [item.recent_request_count for item in snapshot] == [0, 0]


def test_fail_open_when_all_unhealthy() -> None:
    """모두 비정상이면 전체를 정상으로 되돌리고 첫 인스턴스를 주는지 검증한다."""

    pool = _pool(2)
    instances = [pool.get_healthy_instance(), pool.get_healthy_instance()]
    for instance in instances:
        for _ in range(3):
            pool.mark_failure(instance, "down")

    selected = pool.get_healthy_instance()

    assert selected.url == "http://b1.test"
    assert all(item.healthy and item.error_count == 0 for item in pool.snapshot())


def test_empty_pool_raises() -> None:
    """인스턴스가 없으면 NoBackendAvailable인지 검증한다."""

    pool = BackendPool([])

    with pytest.raises(NoBackendAvailable):
        pool.get_healthy_instance()
    with pytest.raises(NoBackendAvailable):
        pool.get_available_instance()


def test_health_check_reports_last_error() -> None:
    """정상 인스턴스가 없으면 마지막 오류와 함께 실패하는지 검증한다."""

    pool = _pool(1)
    pool.health_check()

    instance = pool.get_healthy_instance()
    for _ in range(3):
        pool.mark_failure(instance, "status=502")

    with pytest.raises(NoBackendAvailable) as exc_info:
        pool.health_check()

    assert exc_info.value.detail.cause == "status=502"


def test_probe_unhealthy_recovers_on_200(fake_backends) -> None:
    """헬스 프로브가 200을 받으면 즉시 복귀하는지 검증한다."""

    client = InterpretationClient(http_client=fake_backends.client())
    pool = _pool(2, client=client)
    first, second = pool.get_healthy_instance(), pool.get_healthy_instance()
    for instance in (first, second):
        for _ in range(3):
            pool.mark_failure(instance, "down")
    fake_backends.answer("b1.test", "ok")
    fake_backends.fail("b2.test")

    recovered = pool.probe_unhealthy()

    assert recovered == 1
    assert first.healthy is True
    assert first.error_count == 0
    assert second.healthy is False
    probed = {request.url.host for request in fake_backends.requests if request.url.path == "/health"}
    assert probed == {"b1.test", "b2.test"}


def test_probe_without_client_is_noop() -> None:
    """프로브 클라이언트가 없으면 아무것도 하지 않는지 검증한다."""

    assert _pool(1).probe_unhealthy() == 0


def test_snapshot_and_repr_hide_api_keys() -> None:
    """스냅샷과 표현 문자열에 API 키가 없는지 검증한다."""

    pool = _pool(1)
    instance = pool.get_healthy_instance()

    assert "key-1" not in repr(instance)
    assert "key-1" not in pool.snapshot()[0].model_dump_json()
    assert "key-1" not in str(instance.api_key)
    assert "key-1" not in str(vars(instance))
    assert instance.api_key.get_secret_value() == "key-1"


def test_sliding_window_counter() -> None:
    """창 안의 기록만 세는지 검증한다."""

    clock = FakeClock()
    counter = SlidingWindowCounter(window=10, clock=clock)
    counter.add()
    clock.now += 5
    counter.add()

    assert counter.count() == 2
    clock.now += 6
    assert counter.count() == 1

    with pytest.raises(ValueError):
        SlidingWindowCounter(window=0)
