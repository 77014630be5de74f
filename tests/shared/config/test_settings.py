"""
목적: 타입 설정 모델과 설정 로더를 검증한다.
설명: 기본값, `TAROT_` 환경 변수 병합, 백엔드 목록 파싱, 개수 불일치 오류, 테스트 프로필 제한 치환을 확인한다.
디자인 패턴: 데이터 전송 객체(DTO), 빌더 패턴
참조: src/tarot_reading/shared/config/settings.py, src/tarot_reading/shared/config/loader.py
"""

from __future__ import annotations

import pytest

from tarot_reading.shared.config import AppSettings, ConfigLoader
from tarot_reading.shared.exceptions import ConfigurationError


def test_defaults() -> None:
    """환경 변수가 없을 때 기본값을 검증한다."""

    settings = AppSettings.load(environ={})

    assert settings.queue_ttl_seconds == 3600
    assert settings.worker_count == 10
    assert settings.retry_times == 3
    assert settings.retry_delay == 5.0
    assert settings.shutdown_timeout == 30.0
    assert settings.health_check_interval == 30.0
    assert settings.failure_threshold == 3
    assert settings.limit_global == "30000-H"
    assert settings.limit_create == "100-H"
    assert settings.limit_query == "300-M"
    assert settings.backend_pairs() == []


def test_load_from_prefixed_environment() -> None:
    """접두사 환경 변수가 타입에 맞게 병합되는지 검증한다."""

    settings = AppSettings.load(
        environ={
            "TAROT_WORKER_COUNT": "4",
            "TAROT_RETRY_DELAY": "0.5",
            "TAROT_BACKEND_URLS": "http://a.test/, http://b.test",
            "TAROT_BACKEND_API_KEYS": "key-a,key-b",
            "TAROT_LIMIT_CREATE": "5-M",
            "OTHER_WORKER_COUNT": "99",
        }
    )

    assert settings.worker_count == 4
    assert settings.retry_delay == 0.5
    assert settings.limit_create == "5-M"
    assert settings.backend_pairs() == [("http://a.test", "key-a"), ("http://b.test", "key-b")]


def test_overrides_win_over_environment() -> None:
    """오버라이드가 환경 변수보다 우선하는지 검증한다."""

    settings = AppSettings.load(
        overrides={"worker_count": 2},
        environ={"TAROT_WORKER_COUNT": "8"},
    )

    assert settings.worker_count == 2


def test_backend_list_length_mismatch_is_fatal() -> None:
    """백엔드 URL과 키 개수가 다르면 설정 오류인지 검증한다."""

    with pytest.raises(ConfigurationError) as exc_info:
        AppSettings.from_mapping(
            {"backend_urls": "http://a.test,http://b.test", "backend_api_keys": "only-one"}
        )

    assert exc_info.value.detail.code == "CONFIGURATION_ERROR"


def test_backend_lists_accept_json_arrays() -> None:
    """JSON 배열로 준 URL/키 목록이 그대로 쌍으로 묶이는지 검증한다."""

    settings = AppSettings.load(
        environ={
            "TAROT_BACKEND_URLS": '["http://a.test", "http://b.test/"]',
            "TAROT_BACKEND_API_KEYS": '["k1", "k2"]',
        }
    )

    assert settings.backend_pairs() == [("http://a.test", "k1"), ("http://b.test", "k2")]


def test_backend_keys_reject_broken_json_array() -> None:
    """대괄호로 감싼 키 목록이 JSON으로 해석되지 않으면 설정 오류인지 검증한다."""

    with pytest.raises(ConfigurationError):
        AppSettings.load(
            environ={
                "TAROT_BACKEND_URLS": "http://a.test",
                "TAROT_BACKEND_API_KEYS": '["k1",]',
            }
        )


def test_invalid_value_is_fatal() -> None:
    """범위를 벗어난 값이 기동 시점에 거절되는지 검증한다."""

    with pytest.raises(ConfigurationError):
        AppSettings.from_mapping({"worker_count": 0})


def test_api_keys_are_not_exposed_in_repr() -> None:
    """API 키가 설정 표현 문자열에 드러나지 않는지 검증한다."""

    settings = AppSettings.from_mapping(
        {"backend_urls": ["http://a.test"], "backend_api_keys": ["super-secret"]}
    )

    assert "super-secret" not in repr(settings)
    assert settings.backend_pairs() == [("http://a.test", "super-secret")]


def test_testing_profile_replaces_limits() -> None:
    """테스트 프로필에서 제한 표기가 사실상 무제한으로 바뀌는지 검증한다."""

    assert AppSettings.from_mapping({"testing": True}).resolve_limit("1-H") == "1000000-H"
    assert AppSettings.from_mapping({}).resolve_limit("1-H") == "1-H"


def test_config_loader_nested_env_and_merge() -> None:
    """중첩 구분자와 사전 병합 순서를 검증한다."""

    loader = ConfigLoader()
    data = (
        loader.add_dict({"limits": {"query": "300-M", "create": "100-H"}})
        .add_env(environ={"TAROT_LIMITS__QUERY": "10-S", "TAROT_TESTING": "true"})
        .build()
    )

    assert data["limits"] == {"query": "10-S", "create": "100-H"}
    assert data["testing"] is True
