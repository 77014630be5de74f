"""
목적: 유량 제한 표기 파서를 제공한다.
설명: `"<count>-<unit>"` 형식(단위 S/M/H/D, 대소문자 무관)을 초당 허용량으로 변환한다.
디자인 패턴: 파서 함수
참조: src/tarot_reading/shared/runtime/limiter/registry.py
"""

from __future__ import annotations

import math

from tarot_reading.shared.exceptions import InvalidFormat

UNIT_SECONDS = {
    "S": 1.0,
    "M": 60.0,
    "H": 3600.0,
    "D": 86400.0,
}


def parse_limit(limit: str) -> float:
    """유량 제한 표기를 초당 허용량으로 변환한다.

    Args:
        limit: `"5-S"`, `"10-M"`, `"1000-H"`, `"2000-D"` 같은 표기.

    Returns:
        float: 초당 허용 요청 수.

    Raises:
        InvalidFormat: 형식이 잘못되었거나 개수가 음수/비수치이거나 단위를 모를 때.
    """

    if not isinstance(limit, str):
        raise InvalidFormat("유량 제한 표기는 문자열이어야 합니다.", cause=repr(limit))
    parts = limit.strip().split("-")
    if len(parts) != 2:
        raise InvalidFormat(
            "유량 제한 표기 형식이 올바르지 않습니다.",
            cause=f"limit={limit!r}",
            hint="'<count>-<unit>' 형식을 사용하세요. 예: 100-H",
        )
    raw_count, raw_unit = parts[0].strip(), parts[1].strip()
    try:
        count = float(raw_count)
    except ValueError as error:
        raise InvalidFormat(
            "유량 제한 개수가 숫자가 아닙니다.",
            cause=f"count={raw_count!r}",
            original=error,
        ) from error
    if not math.isfinite(count) or count < 0:
        raise InvalidFormat(
            "유량 제한 개수는 0 이상의 유한한 수여야 합니다.",
            cause=f"count={raw_count!r}",
        )
    unit_seconds = UNIT_SECONDS.get(raw_unit.upper())
    if unit_seconds is None:
        raise InvalidFormat(
            "유량 제한 단위를 알 수 없습니다.",
            cause=f"unit={raw_unit!r}",
            hint="S, M, H, D 중 하나를 사용하세요.",
        )
    return count / unit_seconds
