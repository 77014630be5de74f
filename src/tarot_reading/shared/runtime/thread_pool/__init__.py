"""
목적: 스레드풀 공개 API를 제공한다.
설명: 스레드풀 실행기와 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/runtime/thread_pool/thread_pool.py
"""

from tarot_reading.shared.runtime.thread_pool.model import ShutdownReport, ThreadPoolConfig
from tarot_reading.shared.runtime.thread_pool.thread_pool import ThreadPool

__all__ = ["ThreadPool", "ThreadPoolConfig", "ShutdownReport"]
