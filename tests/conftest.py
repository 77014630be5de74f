"""
목적: 테스트 공통 픽스처/로깅 훅을 단일화해 제공한다.
설명: 테스트마다 분리된 fakeredis 서버, 해석 백엔드 MockTransport, 태스크/설정/컨텍스트 팩토리를 제공한다.
디자인 패턴: 테스트 픽스처 + 테스트 훅
참조: pyproject.toml, src/tarot_reading/api/context.py
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterator, List, Optional
from uuid import uuid4

import fakeredis
import httpx
import pytest

from tarot_reading.api.context import AppContext
from tarot_reading.core.reading.models import TarotTask
from tarot_reading.core.reading.queue import QueueConfig, RedisTaskQueue
from tarot_reading.core.reading.services import generate_task_id
from tarot_reading.shared.config import AppSettings
from tarot_reading.shared.logging import InMemoryLogger

_LOGGER = logging.getLogger("tests")

BackendBehavior = Callable[[httpx.Request], httpx.Response]


def answer_response(answer: str) -> httpx.Response:
    """워크플로 응답 형식의 200 응답을 만든다."""

    return httpx.Response(200, json={"data": {"outputs": {"answer": answer}}})


class FakeBackends:
    """URL 호스트별 동작을 바꿀 수 있는 해석 백엔드 대역.

    등록되지 않은 호스트는 502를 반환한다. 받은 요청은 `requests`에 쌓인다.
    """

    def __init__(self) -> None:
        self.behaviors: Dict[str, BackendBehavior] = {}
        self.requests: List[httpx.Request] = []

    def answer(self, host: str, text: str) -> None:
        self.behaviors[host] = lambda request: answer_response(text)

    def fail(self, host: str, status_code: int = 500, body: str = "boom") -> None:
        self.behaviors[host] = lambda request: httpx.Response(status_code, text=body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        behavior = self.behaviors.get(request.url.host)
        if behavior is None:
            return httpx.Response(502, text="unknown backend")
        return behavior(request)

    def workflow_requests(self, host: Optional[str] = None) -> List[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.url.path.endswith("/workflows/run")
            and (host is None or request.url.host == host)
        ]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handle))


@pytest.fixture
def redis_client() -> Iterator[fakeredis.FakeRedis]:
    """테스트마다 분리된 fakeredis 클라이언트를 반환한다."""

    client = fakeredis.FakeRedis(server=fakeredis.FakeServer())
    yield client
    client.close()


@pytest.fixture
def queue_config() -> QueueConfig:
    """적재 제한을 끈 큐 설정을 반환한다."""

    return QueueConfig(prefix=f"test:{uuid4().hex[:8]}", ttl_seconds=60, rate_limit=0)


@pytest.fixture
def task_queue(redis_client: fakeredis.FakeRedis, queue_config: QueueConfig) -> RedisTaskQueue:
    """fakeredis 기반 태스크 큐를 반환한다."""

    return RedisTaskQueue(redis_client, config=queue_config, logger=InMemoryLogger(name="test-queue"))


@pytest.fixture
def make_task() -> Callable[..., TarotTask]:
    """기본값이 채워진 태스크 팩토리를 반환한다."""

    def factory(**overrides) -> TarotTask:
        data = {
            "id": generate_task_id(),
            "user_id": "user-1",
            "question": "Will it rain?",
            "cards": [1, 15, 21],
        }
        data.update(overrides)
        return TarotTask(**data)

    return factory


@pytest.fixture
def fake_backends() -> FakeBackends:
    """해석 백엔드 대역을 반환한다."""

    return FakeBackends()


@pytest.fixture
def make_settings() -> Callable[..., AppSettings]:
    """테스트 기본값이 채워진 설정 팩토리를 반환한다."""

    def factory(**overrides) -> AppSettings:
        data = {
            "queue_prefix": f"test:{uuid4().hex[:8]}",
            "queue_ttl_seconds": 60,
            "queue_rate_limit": 0,
            "worker_count": 2,
            "worker_poll_timeout": 0.05,
            "retry_times": 3,
            "retry_delay": 0.01,
            "shutdown_timeout": 5.0,
            "backend_urls": ["http://b1.test", "http://b2.test"],
            "backend_api_keys": ["key-1", "key-2"],
            "backend_timeout": 2.0,
        }
        data.update(overrides)
        return AppSettings.from_mapping(data)

    return factory


@pytest.fixture
def make_context(
    redis_client: fakeredis.FakeRedis,
    fake_backends: FakeBackends,
) -> Iterator[Callable[[AppSettings], AppContext]]:
    """fakeredis와 백엔드 대역으로 조립한 컨텍스트 팩토리를 반환한다."""

    contexts: List[AppContext] = []

    def factory(settings: AppSettings) -> AppContext:
        context = AppContext.build(
            settings,
            redis_client=redis_client,
            http_client=fake_backends.client(),
            logger=InMemoryLogger(name="test-app"),
        )
        contexts.append(context)
        return context

    yield factory
    for context in contexts:
        context.stop()


def request_json(request: httpx.Request) -> dict:
    """MockTransport가 받은 요청 본문을 사전으로 반환한다."""

    return json.loads(request.content.decode("utf-8"))


@pytest.fixture
def read_request_json() -> Callable[[httpx.Request], dict]:
    """요청 본문 해석 함수를 반환한다."""

    return request_json


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
