"""
목적: 타로 해석 API 서비스 공개 API를 제공한다.
설명: 서비스 클래스와 요청 단위 서비스 의존성 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/api/reading/services/reading_service.py
"""

from tarot_reading.api.reading.services.reading_service import (
    ReadingAPIService,
    get_reading_service,
)

__all__ = ["ReadingAPIService", "get_reading_service"]
