"""
목적: Redis 연동 공개 API를 제공한다.
설명: Redis 클라이언트 팩토리를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/integrations/redis/client.py
"""

from tarot_reading.integrations.redis.client import create_redis_client

__all__ = ["create_redis_client"]
