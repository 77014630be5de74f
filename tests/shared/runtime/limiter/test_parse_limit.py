"""
목적: 유량 제한 표기 파서를 검증한다.
설명: 단위별 초당 환산, 대소문자 무관 단위, 잘못된 표기 거절을 확인한다.
디자인 패턴: 파서 함수
참조: src/tarot_reading/shared/runtime/limiter/rate.py
"""

from __future__ import annotations

import pytest

from tarot_reading.shared.exceptions import InvalidFormat
from tarot_reading.shared.runtime.limiter import parse_limit


@pytest.mark.parametrize(
    ("limit", "expected"),
    [
        ("5-S", 5.0),
        ("10-M", 10.0 / 60),
        ("1000-H", 1000.0 / 3600),
        ("2000-D", 2000.0 / 86400),
        ("3-h", 3.0 / 3600),
        ("0-S", 0.0),
        ("1.5-S", 1.5),
    ],
)
def test_parse_limit_valid(limit: str, expected: float) -> None:
    """올바른 표기를 초당 허용량으로 바꾸는지 검증한다."""

    assert parse_limit(limit) == pytest.approx(expected)


@pytest.mark.parametrize(
    "limit",
    ["", "5", "5-", "-S", "abc-S", "5-X", "5-S-1", "-5-S", "inf-S", "nan-S"],
)
def test_parse_limit_invalid(limit: str) -> None:
    """잘못된 표기가 InvalidFormat으로 거절되는지 검증한다."""

    with pytest.raises(InvalidFormat):
        parse_limit(limit)
