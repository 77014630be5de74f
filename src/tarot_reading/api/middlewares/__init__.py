"""
목적: API 미들웨어 공개 API를 제공한다.
설명: 유량 제한 의존성 팩토리를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/api/middlewares/rate_limit.py
"""

from tarot_reading.api.middlewares.rate_limit import (
    client_ip,
    limit_ip,
    limit_per_route,
    route_with_ip,
)

__all__ = ["limit_ip", "limit_per_route", "client_ip", "route_with_ip"]
