"""
목적: 타로 해석 도메인 서비스 공개 API를 제공한다.
설명: 태스크 실행기, 재시도 설정, 태스크 식별자 생성기를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/core/reading/services/task_executor.py
"""

from tarot_reading.core.reading.services.task_executor import ReadingTaskExecutor, RetryConfig
from tarot_reading.core.reading.services.task_id import generate_task_id

__all__ = ["ReadingTaskExecutor", "RetryConfig", "generate_task_id"]
