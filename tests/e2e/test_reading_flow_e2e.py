"""
목적: 타로 해석 전체 흐름 E2E 테스트를 제공한다.
설명: 워커풀을 띄운 앱에 요청을 넣고 상태를 폴링해, 성공 시 completed와 해석이, 모든 백엔드 실패 시
    재시도 후 failed와 마지막 오류가 남는지 확인한다. Redis는 fakeredis, 백엔드는 MockTransport를 쓴다.
디자인 패턴: 블랙박스 E2E 테스트
참조: tests/conftest.py, src/tarot_reading/api/app.py, src/tarot_reading/api/context.py
"""

from __future__ import annotations

import time
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from tarot_reading.api.app import create_app

_POLL_TIMEOUT_SECONDS = 5.0
_POLL_INTERVAL_SECONDS = 0.02
_BODY = {"user_id": "user-42", "question": "Will it rain?", "cards": [1, 15, 21]}


@pytest.fixture
def running_client(make_settings, make_context) -> Iterator[TestClient]:
    """워커풀이 동작 중인 API 클라이언트를 반환한다."""

    settings = make_settings(testing=True)
    app = create_app(context_factory=lambda: make_context(settings))
    with TestClient(app) as client:
        yield client


def _wait_terminal(client: TestClient, task_id: str) -> dict:
    """태스크가 최종 상태가 될 때까지 폴링한 뒤 결과 응답을 반환한다."""

    deadline = time.monotonic() + _POLL_TIMEOUT_SECONDS
    while time.monotonic() < deadline:
        status = client.get(f"/v1/tarot/readings/{task_id}/status").json()["status"]
        if status in {"completed", "failed"}:
            return client.get(f"/v1/tarot/readings/{task_id}").json()
        time.sleep(_POLL_INTERVAL_SECONDS)
    raise AssertionError(f"태스크가 제한 시간 안에 끝나지 않았습니다: {task_id}")


def test_reading_completes_with_answer(running_client: TestClient, fake_backends) -> None:
    """정상 백엔드가 있으면 completed와 해석이 남는지 검증한다."""

    fake_backends.answer("b1.test", "Yes, soon.")
    fake_backends.answer("b2.test", "Yes, soon.")

    submitted = running_client.post("/v1/tarot/readings", json=_BODY)
    assert submitted.status_code == 201
    task_id = submitted.json()["task_id"]

    result = _wait_terminal(running_client, task_id)

    assert result == {
        "task_id": task_id,
        "status": "completed",
        "result": "Yes, soon.",
        "error_message": None,
    }
    assert len(fake_backends.workflow_requests()) == 1


def test_reading_fails_after_retries(running_client: TestClient, fake_backends) -> None:
    """모든 백엔드가 실패하면 재시도 후 failed와 마지막 오류가 남는지 검증한다."""

    fake_backends.fail("b1.test", status_code=500, body="b1 down")
    fake_backends.fail("b2.test", status_code=500, body="b2 down")

    task_id = running_client.post("/v1/tarot/readings", json=_BODY).json()["task_id"]

    result = _wait_terminal(running_client, task_id)

    assert result["status"] == "failed"
    assert result["result"] is None
    assert result["error_message"].startswith("태스크가 3회 시도 후 실패했습니다.")
    assert "status=500" in result["error_message"]
    assert len(fake_backends.workflow_requests()) == 3

    health = running_client.get("/v1/tarot/health/queue").json()
    assert health["metrics"]["errors"]["process"] == 1
