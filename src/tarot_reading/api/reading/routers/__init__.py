"""
목적: 타로 해석 라우터 공개 API를 제공한다.
설명: 타로 해석 라우터 인스턴스를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/api/reading/routers/router.py
"""

from tarot_reading.api.reading.routers.router import router

__all__ = ["router"]
