"""
목적: 타로 해석 API 서비스 레이어를 제공한다.
설명: 요청 검증, 태스크 생성/적재, 상태·결과 조회, 준비 상태 점검을 큐와 백엔드 풀에 연결한다.
디자인 패턴: 서비스 레이어
참조: src/tarot_reading/api/context.py, src/tarot_reading/api/reading/models
"""

from __future__ import annotations

import time
from typing import Optional

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from tarot_reading.api.context import AppContext
from tarot_reading.api.reading.models import (
    QueueHealthResponse,
    ReadinessResponse,
    ReadingResultResponse,
    ReadingStatusResponse,
    SubmitReadingRequest,
    SubmitReadingResponse,
)
from tarot_reading.core.reading.models import TarotTask, TaskStatus
from tarot_reading.core.reading.services import generate_task_id
from tarot_reading.shared.exceptions import TaskNotFound, ValidationError
from tarot_reading.shared.logging import LogContext, Logger


class ReadingAPIService:
    """타로 해석 API 전용 서비스."""

    def __init__(self, context: AppContext, logger: Optional[Logger] = None) -> None:
        self._context = context
        self._logger = logger or context.logger

    def submit(self, request: SubmitReadingRequest) -> SubmitReadingResponse:
        """해석 요청을 태스크로 만들어 큐에 적재한다.

        Raises:
            ValidationError: 사용자/질문/카드 값이 올바르지 않을 때.
            RateLimited, SerializationError, BackendUnavailable: 큐 적재 실패 시.
        """

        task = self._build_task(request)
        self._context.queue.push(task)
        self._logger.info(
            "타로 해석 태스크를 접수했습니다.",
            LogContext(task_id=task.id, user_id=task.user_id),
        )
        return SubmitReadingResponse(
            task_id=task.id,
            status=TaskStatus.PENDING,
            created_at=task.created_at,
        )

    def get_status(self, task_id: str) -> ReadingStatusResponse:
        """태스크 상태를 조회한다."""

        status = self._context.queue.get_status(self._require_task_id(task_id))
        if status is None:
            raise self._not_found(task_id)
        return ReadingStatusResponse(task_id=task_id, status=status)

    def get_result(self, task_id: str) -> ReadingResultResponse:
        """태스크 결과를 조회한다."""

        progress = self._context.queue.get_progress(self._require_task_id(task_id))
        if progress is None:
            raise self._not_found(task_id)
        response = ReadingResultResponse(task_id=task_id, status=progress.status)
        if progress.status == TaskStatus.COMPLETED:
            response.result = progress.result
        elif progress.status == TaskStatus.FAILED:
            response.error_message = progress.result
        return response

    def readiness(self) -> ReadinessResponse:
        """Redis 연결과 정상 백엔드 유무를 확인한다.

        Raises:
            BackendUnavailable: Redis 연결 실패.
            NoBackendAvailable: 정상 백엔드 없음.
        """

        self._context.queue.ping()
        self._context.pool.health_check()
        return ReadinessResponse(status="ok", time=int(time.time()))

    def queue_health(self) -> QueueHealthResponse:
        """큐 길이, 처리 지표, 백엔드 상태를 반환한다."""

        return QueueHealthResponse(
            queue_size=self._context.queue.size(),
            workers=self._context.settings.worker_count,
            worker_state=self._context.worker_pool.state.value,
            metrics=self._context.queue.metrics.snapshot(),
            backends=self._context.pool.snapshot(),
        )

    def _build_task(self, request: SubmitReadingRequest) -> TarotTask:
        try:
            return TarotTask(
                id=generate_task_id(),
                user_id=request.user_id.strip(),
                question=request.question,
                cards=request.cards,
            )
        except PydanticValidationError as error:
            raise ValidationError(
                "타로 해석 요청이 올바르지 않습니다.",
                cause="; ".join(
                    f"{'.'.join(str(loc) for loc in item['loc'])}: {item['msg']}"
                    for item in error.errors()
                ),
                original=error,
            ) from error

    def _require_task_id(self, task_id: str) -> str:
        if not task_id or not task_id.strip():
            raise ValidationError("태스크 ID가 필요합니다.")
        return task_id

    def _not_found(self, task_id: str) -> TaskNotFound:
        return TaskNotFound(
            "태스크가 없거나 만료되었습니다.",
            metadata={"task_id": task_id},
        )


def get_reading_service(request: Request) -> ReadingAPIService:
    """요청이 속한 앱의 컨텍스트로 서비스를 만든다."""

    context: AppContext = request.app.state.context
    return ReadingAPIService(context)
