"""
목적: 공통 상수 집합을 제공한다.
설명: 프로젝트 전역에서 사용하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/tarot_reading/shared/config/loader.py, src/tarot_reading/shared/config/settings.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_PREFIX: 애플리케이션 설정 환경 변수 접두사.
        ENV_NESTED_DELIMITER: 환경 변수 키를 중첩 경로로 해석하는 구분자.
        LIST_DELIMITER: 목록형 환경 변수 값의 구분자.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_PREFIX = "TAROT_"
    ENV_NESTED_DELIMITER = "__"
    LIST_DELIMITER = ","


__all__ = ["SharedConst"]
