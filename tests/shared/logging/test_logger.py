"""
목적: 인메모리 로거 동작을 검증한다.
설명: 레코드 저장, 컨텍스트 병합, 하위 로거 공유, 최소 레벨 필터를 확인한다.
디자인 패턴: 저장소 패턴
참조: src/tarot_reading/shared/logging/logger.py, src/tarot_reading/shared/logging/models.py
"""

from __future__ import annotations

from tarot_reading.shared.logging import InMemoryLogger, LogContext, LogLevel


def test_logger_stores_records() -> None:
    """로그가 저장소에 쌓이는지 검증한다."""

    logger = InMemoryLogger(name="unit", emit_stdout=False)
    logger.info("hello", LogContext(task_id="task_1"))

    records = logger.repository.list()
    assert len(records) == 1
    assert records[0].level == LogLevel.INFO
    assert records[0].message == "hello"
    assert records[0].context is not None
    assert records[0].context.task_id == "task_1"


def test_with_context_merges_base_context() -> None:
    """기본 컨텍스트와 호출 컨텍스트가 병합되는지 검증한다."""

    logger = InMemoryLogger(name="unit", emit_stdout=False).with_context(
        LogContext(worker_id="reading-worker-0")
    )
    logger.warning("retry", LogContext(task_id="task_2"))

    record = logger.repository.list()[-1]
    assert record.context is not None
    assert record.context.worker_id == "reading-worker-0"
    assert record.context.task_id == "task_2"


def test_child_logger_shares_repository() -> None:
    """하위 로거가 같은 저장소를 쓰고 이름을 이어 붙이는지 검증한다."""

    root = InMemoryLogger(name="tarot_reading", emit_stdout=False)
    child = root.child("queue")
    child.error("failed")

    record = root.repository.list()[-1]
    assert child.name == "tarot_reading.queue"
    assert record.logger_name == "tarot_reading.queue"


def test_min_level_filters_records() -> None:
    """최소 레벨 미만 로그가 버려지는지 검증한다."""

    logger = InMemoryLogger(name="unit", emit_stdout=False, min_level=LogLevel.WARNING)
    logger.debug("skip")
    logger.info("skip")
    logger.warning("keep")

    messages = [record.message for record in logger.repository.list()]
    assert messages == ["keep"]
