"""
목적: 타입이 지정된 애플리케이션 설정 모델을 제공한다.
설명: 기동 시 한 번 검증되는 큐/워커/백엔드/유량 제한 설정과 기본값을 정의한다.
디자인 패턴: 데이터 전송 객체(DTO), 팩토리 메서드
참조: src/tarot_reading/shared/config/loader.py, src/tarot_reading/api/context.py
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from tarot_reading.shared.config.loader import ConfigLoader
from tarot_reading.shared.const import SharedConst
from tarot_reading.shared.exceptions import ConfigurationError
from tarot_reading.shared.logging import Logger


class AppSettings(BaseModel):
    """애플리케이션 설정 모델이다.

    필수 값은 없으며, 해석 백엔드 URL/키 목록은 길이가 같아야 한다.
    유량 제한 표기(`*_limit`)는 여기서 검증하지 않는다. 잘못된 표기는
    리미터가 오류를 기록하고 요청을 통과시키는 방식으로 처리한다.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    redis_url: str = Field(default="redis://127.0.0.1:6379/0")

    queue_prefix: str = Field(default="tarot:queue", min_length=1)
    queue_ttl_seconds: int = Field(default=3600, ge=1)
    queue_rate_limit: float = Field(default=12.0, ge=0)
    queue_rate_burst: int = Field(default=50, ge=1)
    queue_push_timeout: float = Field(default=1.0, ge=0)

    worker_count: int = Field(default=10, ge=1)
    worker_poll_timeout: float = Field(default=1.0, gt=0)
    retry_times: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=5.0, ge=0)
    shutdown_timeout: float = Field(default=30.0, ge=0)

    backend_urls: List[str] = Field(default_factory=list)
    backend_api_keys: List[SecretStr] = Field(default_factory=list)
    backend_timeout: float = Field(default=30.0, gt=0)
    health_check_interval: float = Field(default=30.0, gt=0)
    failure_threshold: int = Field(default=3, ge=1)
    load_window_seconds: float = Field(default=300.0, gt=0)

    limiter_burst: int = Field(default=100, ge=1)
    limit_global: str = Field(default="30000-H")
    limit_create: str = Field(default="100-H")
    limit_query: str = Field(default="300-M")
    limiter_sweep_interval: float = Field(default=3600.0, gt=0)
    limiter_idle_ttl: float = Field(default=86400.0, gt=0)

    testing: bool = Field(default=False)

    @field_validator("backend_urls", "backend_api_keys", mode="before")
    @classmethod
    def _split_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (int, float)):
            value = str(value)
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("[") and text.endswith("]"):
                try:
                    value = json.loads(text)
                except json.JSONDecodeError as error:
                    raise ValueError(f"JSON 목록 형식이 올바르지 않습니다: {error.msg}") from error
            else:
                parts = [part.strip() for part in text.split(SharedConst.LIST_DELIMITER)]
                return [part for part in parts if part]
        if isinstance(value, (list, tuple)):
            items = []
            for item in value:
                if isinstance(item, SecretStr):
                    items.append(item)
                elif str(item).strip():
                    items.append(str(item).strip())
            return items
        return value

    @field_validator("backend_urls")
    @classmethod
    def _strip_trailing_slash(cls, value: List[str]) -> List[str]:
        return [url.rstrip("/") for url in value]

    @model_validator(mode="after")
    def _check_backend_pairs(self) -> "AppSettings":
        if len(self.backend_urls) != len(self.backend_api_keys):
            raise ValueError(
                "backend_urls와 backend_api_keys의 개수가 일치하지 않습니다: "
                f"urls={len(self.backend_urls)}, keys={len(self.backend_api_keys)}"
            )
        return self

    @classmethod
    def load(
        cls,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
        logger: Optional[Logger] = None,
    ) -> "AppSettings":
        """`TAROT_` 환경 변수와 오버라이드를 병합해 설정을 만든다."""

        loader = ConfigLoader(logger=logger, raw_keys={"backend_api_keys", "redis_url"})
        data = loader.add_env(environ=environ).build(overrides=overrides)
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AppSettings":
        """사전에서 설정을 검증해 생성한다."""

        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as error:
            raise ConfigurationError(
                "애플리케이션 설정이 올바르지 않습니다.",
                cause=str(error),
                original=error,
            ) from error

    def resolve_limit(self, limit: str) -> str:
        """테스트 프로필이면 사실상 무제한 표기로 바꿔 반환한다."""

        if self.testing:
            return "1000000-H"
        return limit

    def backend_pairs(self) -> list[tuple[str, str]]:
        """(URL, API 키) 쌍 목록을 반환한다."""

        return [
            (url, key.get_secret_value())
            for url, key in zip(self.backend_urls, self.backend_api_keys)
        ]
