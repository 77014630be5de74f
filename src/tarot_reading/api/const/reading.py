"""
목적: 타로 해석 API 라우팅 상수를 정의한다.
설명: 라우터 prefix, tag, 경로 상수와 유량 제한 레지스트리 이름을 중앙에서 관리한다.
디자인 패턴: 상수 객체 패턴
참조: src/tarot_reading/api/reading/routers/router.py, src/tarot_reading/api/middlewares/rate_limit.py
"""

from __future__ import annotations

# 타로 해석 API 공통 상수
READING_API_PREFIX = "/v1/tarot"
READING_API_TAG = "tarot-reading"
READING_CREATE_PATH = "/readings"
READING_RESULT_PATH = "/readings/{task_id}"
READING_STATUS_PATH = "/readings/{task_id}/status"
READING_HEALTH_PATH = "/health"
READING_QUEUE_HEALTH_PATH = "/health/queue"

# 유량 제한 레지스트리 이름
LIMITER_GLOBAL = "global"
LIMITER_CREATE = "create"
LIMITER_QUERY = "query"
