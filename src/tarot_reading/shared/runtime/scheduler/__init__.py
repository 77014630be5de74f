"""
목적: 주기 작업 공개 API를 제공한다.
설명: 주기 실행 백그라운드 작업을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/runtime/scheduler/periodic_task.py
"""

from tarot_reading.shared.runtime.scheduler.periodic_task import PeriodicTask

__all__ = ["PeriodicTask"]
