"""
목적: 해석 백엔드 HTTP 클라이언트를 제공한다.
설명: 워크플로 실행 API(`POST {url}/workflows/run`)를 블로킹 모드로 호출해 해석 텍스트를 받고,
    헬스 엔드포인트(`GET {url}/health`)로 인스턴스 상태를 확인한다.
    전송 오류, 타임아웃, 2xx 이외 응답, 빈 응답은 모두 일시 장애로 간주한다.
디자인 패턴: 게이트웨이 패턴
참조: src/tarot_reading/integrations/interpreter/model.py, src/tarot_reading/core/reading/services/task_executor.py
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx

from tarot_reading.integrations.interpreter.model import BackendInstance
from tarot_reading.shared.exceptions import BackendUnavailable
from tarot_reading.shared.logging import LogContext, Logger, create_default_logger

WORKFLOW_PATH = "/workflows/run"
HEALTH_PATH = "/health"
_ERROR_BODY_LIMIT = 500


class InterpretationClient:
    """해석 백엔드 HTTP 클라이언트.

    Args:
        timeout: 기본 요청 타임아웃(초).
        http_client: 주입할 httpx 클라이언트. 테스트에서는 MockTransport 클라이언트를 넣는다.
        logger: 로거.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=httpx.Timeout(timeout))
        self._logger = logger or create_default_logger("InterpretationClient")

    def interpret(
        self,
        instance: BackendInstance,
        question: str,
        cards: Sequence[int],
        user: str,
        timeout: Optional[float] = None,
    ) -> str:
        """질문과 카드로 해석을 요청하고 해석 텍스트를 반환한다.

        Raises:
            BackendUnavailable: 호출 실패, 2xx 이외 응답, 응답 해석 실패, 빈 해석일 때.
        """

        body = {
            "inputs": {
                "question": question,
                "cards": ",".join(str(card) for card in cards),
            },
            "response_mode": "blocking",
            "user": user,
        }
        url = f"{instance.url}{WORKFLOW_PATH}"
        context = LogContext(task_id=user, backend_url=instance.url)
        try:
            response = self._client.post(
                url,
                json=body,
                headers=self._headers(instance),
                timeout=self._resolve_timeout(timeout),
            )
        except httpx.TimeoutException as error:
            raise BackendUnavailable(
                "해석 백엔드 응답 시간이 초과되었습니다.",
                original=error,
                metadata={"backend_url": instance.url},
            ) from error
        except httpx.HTTPError as error:
            raise BackendUnavailable(
                "해석 백엔드 호출에 실패했습니다.",
                original=error,
                metadata={"backend_url": instance.url},
            ) from error

        if not response.is_success:
            raise BackendUnavailable(
                "해석 백엔드가 오류 상태를 반환했습니다.",
                cause=f"status={response.status_code}, body={response.text[:_ERROR_BODY_LIMIT]}",
                metadata={"backend_url": instance.url, "status_code": response.status_code},
            )
        try:
            payload = response.json()
        except ValueError as error:
            raise BackendUnavailable(
                "해석 백엔드 응답을 해석할 수 없습니다.",
                original=error,
                metadata={"backend_url": instance.url},
            ) from error

        answer = extract_answer(payload)
        if not answer:
            raise BackendUnavailable(
                "해석 백엔드가 빈 해석을 반환했습니다.",
                metadata={"backend_url": instance.url},
            )
        self._logger.debug("해석 백엔드 호출이 완료되었습니다.", context)
        return answer

    def probe(self, instance: BackendInstance, timeout: Optional[float] = None) -> bool:
        """헬스 엔드포인트가 200을 반환하면 True."""

        try:
            response = self._client.get(
                f"{instance.url}{HEALTH_PATH}",
                headers=self._headers(instance),
                timeout=self._resolve_timeout(timeout),
            )
        except httpx.HTTPError as error:
            self._logger.debug(
                f"헬스 프로브 실패: {error}",
                LogContext(backend_url=instance.url),
            )
            return False
        return response.status_code == 200

    def close(self) -> None:
        """직접 만든 httpx 클라이언트를 닫는다."""

        if self._owns_client:
            self._client.close()

    def _headers(self, instance: BackendInstance) -> dict:
        return {
            "Authorization": f"Bearer {instance.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    def _resolve_timeout(self, timeout: Optional[float]) -> httpx.Timeout:
        return httpx.Timeout(self._timeout if timeout is None else timeout)


def extract_answer(payload: Any) -> str:
    """응답 본문에서 해석 텍스트를 꺼낸다.

    `data.outputs.answer`를 먼저 보고, 없으면 `data.answer`를 본다.
    """

    if not isinstance(payload, dict):
        return ""
    data = payload.get("data")
    if not isinstance(data, dict):
        return ""
    outputs = data.get("outputs")
    if isinstance(outputs, dict):
        answer = outputs.get("answer")
        if isinstance(answer, str) and answer.strip():
            return answer
    answer = data.get("answer")
    if isinstance(answer, str) and answer.strip():
        return answer
    return ""
