"""
목적: 백엔드 헬스 프로버를 검증한다.
설명: 주기 작업이 비정상 인스턴스를 점검해 복구시키는지 확인한다.
디자인 패턴: 주기 작업 위임
참조: src/tarot_reading/integrations/interpreter/prober.py
"""

from __future__ import annotations

import time

from tarot_reading.integrations.interpreter import BackendPool, HealthProber, InterpretationClient


def test_prober_recovers_unhealthy_backend(fake_backends) -> None:
    """프로버가 주기적으로 비정상 백엔드를 복구하는지 검증한다."""

    client = InterpretationClient(http_client=fake_backends.client())
    pool = BackendPool.from_pairs([("http://b1.test", "key-1")], client=client)
    instance = pool.get_healthy_instance()
    for _ in range(3):
        pool.mark_failure(instance, "down")
    fake_backends.answer("b1.test", "ok")

    with HealthProber(pool, interval=0.01) as prober:
        deadline = time.monotonic() + 2.0
        while not instance.healthy and time.monotonic() < deadline:
            time.sleep(0.01)

    assert instance.healthy is True
    assert prober.name == "health-prober"
    assert prober.runs >= 1
