"""
목적: 요청 유량 제한 의존성을 제공한다.
설명: 클라이언트 IP 또는 라우트+IP를 키로 토큰 버킷을 조회해, 거절 시 429를 반환하고
    허용 시 `X-RateLimit-Limit/Remaining/Reset` 헤더를 붙인다.
디자인 패턴: 의존성 주입, 가드
참조: src/tarot_reading/shared/runtime/limiter/registry.py, src/tarot_reading/api/context.py
"""

from __future__ import annotations

from typing import Callable

from fastapi import HTTPException, Request, Response, status

from tarot_reading.api.context import AppContext
from tarot_reading.shared.exceptions import RateLimited
from tarot_reading.shared.runtime.limiter import RateDecision

KeyFunc = Callable[[Request], str]

UNKNOWN_CLIENT = "unknown"


def client_ip(request: Request) -> str:
    """클라이언트 IP를 반환한다."""

    if request.client is None or not request.client.host:
        return UNKNOWN_CLIENT
    return request.client.host


def route_with_ip(request: Request) -> str:
    """라우트 경로와 클라이언트 IP를 합친 키를 반환한다."""

    route = request.scope.get("route")
    path = getattr(route, "path", None) or request.url.path
    route_key = path.replace("/", "-").replace(":", "_")
    return f"{route_key}{client_ip(request)}"


def _build_dependency(limiter_name: str, key_func: KeyFunc) -> Callable[[Request, Response], None]:
    def dependency(request: Request, response: Response) -> None:
        context: AppContext = request.app.state.context
        decision = context.limiter(limiter_name).check(key_func(request))
        if not decision.allowed:
            error = RateLimited(
                "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
                metadata={"limiter": limiter_name},
            )
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=error.to_dict(),
            )
        _set_headers(response, decision)

    return dependency


def limit_ip(limiter_name: str) -> Callable[[Request, Response], None]:
    """클라이언트 IP 기준 유량 제한 의존성을 만든다."""

    return _build_dependency(limiter_name, client_ip)


def limit_per_route(limiter_name: str) -> Callable[[Request, Response], None]:
    """라우트+IP 기준 유량 제한 의존성을 만든다."""

    return _build_dependency(limiter_name, route_with_ip)


def _set_headers(response: Response, decision: RateDecision) -> None:
    if decision.limit is None:
        return
    response.headers["X-RateLimit-Limit"] = f"{decision.limit:g}"
    response.headers["X-RateLimit-Remaining"] = f"{decision.remaining:g}"
    response.headers["X-RateLimit-Reset"] = str(decision.reset_at)
