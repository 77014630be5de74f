"""
목적: 동기화 도구 공개 API를 제공한다.
설명: 리더-라이터 잠금을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/runtime/lock/rw_lock.py
"""

from tarot_reading.shared.runtime.lock.rw_lock import ReadWriteLock

__all__ = ["ReadWriteLock"]
