"""
목적: Redis 클라이언트 팩토리를 제공한다.
설명: URL에서 동기 Redis 클라이언트를 만든다. 블로킹 팝 대기 시간보다 소켓 타임아웃이 짧으면 안 된다.
디자인 패턴: 팩토리 함수
참조: src/tarot_reading/api/context.py, src/tarot_reading/core/reading/queue/redis_task_queue.py
"""

from __future__ import annotations

from typing import Optional

import redis


def create_redis_client(url: str, socket_timeout: Optional[float] = None) -> redis.Redis:
    """URL로 Redis 클라이언트를 만든다."""

    return redis.Redis.from_url(
        url,
        socket_timeout=socket_timeout,
        health_check_interval=30,
    )
