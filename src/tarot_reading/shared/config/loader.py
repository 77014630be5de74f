"""
목적: 애플리케이션 설정 로더를 제공한다.
설명: dict와 접두사 환경 변수를 병합해 AppSettings 입력 사전을 만든다.
디자인 패턴: 빌더 패턴
참조: src/tarot_reading/shared/config/settings.py, src/tarot_reading/shared/const/__init__.py
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, Mapping, Optional

from tarot_reading.shared.const import SharedConst
from tarot_reading.shared.logging import Logger, create_default_logger


class ConfigLoader:
    """설정 로더 구현체이다.

    Args:
        logger: 주입 가능한 로거.
        raw_keys: 타입 추론 없이 문자열로 유지할 키 목록(API 키 등).
    """

    _DEFAULT_ENV_DELIMITER = SharedConst.ENV_NESTED_DELIMITER

    def __init__(
        self,
        logger: Optional[Logger] = None,
        raw_keys: Optional[Iterable[str]] = None,
    ) -> None:
        self._logger = logger or create_default_logger("ConfigLoader")
        self._raw_keys = {key.lower() for key in (raw_keys or ())}
        self._sources: list[Dict[str, Any]] = []

    def add_dict(self, data: Optional[Mapping[str, Any]]) -> "ConfigLoader":
        """딕셔너리 설정을 추가한다."""

        if not data:
            return self
        self._sources.append(dict(data))
        return self

    def add_env(
        self,
        prefix: str = SharedConst.ENV_PREFIX,
        delimiter: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ConfigLoader":
        """접두사가 붙은 환경 변수 설정을 추가한다.

        `TAROT_WORKER_COUNT=4`는 `{"worker_count": 4}`로,
        `TAROT_LIMITS__QUERY=300-M`은 `{"limits": {"query": "300-M"}}`로 해석된다.
        """

        delimiter = delimiter or self._DEFAULT_ENV_DELIMITER
        source = os.environ if environ is None else environ
        env_data: Dict[str, Any] = {}
        for key, value in source.items():
            if prefix and not key.startswith(prefix):
                continue
            trimmed = key[len(prefix) :] if prefix else key
            parts = [part.lower() for part in trimmed.split(delimiter) if part]
            if not parts:
                continue
            parsed = value if parts[-1] in self._raw_keys else self._parse_value(value)
            self._assign_nested(env_data, parts, parsed)
        if env_data:
            self._sources.append(env_data)
            self._logger.debug(f"환경 변수 설정을 읽었습니다: prefix={prefix}, keys={sorted(env_data)}")
        return self

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """수집된 설정을 병합해 반환한다."""

        merged: Dict[str, Any] = {}
        for source in self._sources:
            merged = self._merge(merged, source)
        if overrides:
            merged = self._merge(merged, dict(overrides))
        return merged

    def _assign_nested(self, root: Dict[str, Any], keys: list[str], value: Any) -> None:
        current = root
        for part in keys[:-1]:
            if part not in current or not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[keys[-1]] = value

    def _merge(self, base: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
        merged = dict(base)
        for key, value in incoming.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _parse_value(self, raw: str) -> Any:
        lowered = raw.strip().lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered in {"null", "none"}:
            return None
        try:
            if "." in raw:
                return float(raw)
            return int(raw)
        except ValueError:
            pass
        if (raw.startswith("{") and raw.endswith("}")) or (
            raw.startswith("[") and raw.endswith("]")
        ):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                return raw
        return raw
