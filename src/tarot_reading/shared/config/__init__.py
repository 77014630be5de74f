"""
목적: 설정 로더 공개 API를 제공한다.
설명: 설정 병합 로더, 런타임 환경 로더, 타입 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/shared/config/loader.py, src/tarot_reading/shared/config/runtime_env_loader.py, src/tarot_reading/shared/config/settings.py
"""

from tarot_reading.shared.config.loader import ConfigLoader
from tarot_reading.shared.config.runtime_env_loader import RuntimeEnvironmentLoader
from tarot_reading.shared.config.settings import AppSettings

__all__ = ["ConfigLoader", "RuntimeEnvironmentLoader", "AppSettings"]
