"""
목적: FastAPI 앱 실행 엔트리 포인트 제공
설명: 런타임 환경 파일을 로드한 뒤 앱을 만든다. `uvicorn tarot_reading.api.main:app`으로 실행한다.
디자인 패턴: 단일 책임 원칙(SRP)
참조: src/tarot_reading/api/app.py
"""
from tarot_reading.shared.config import RuntimeEnvironmentLoader

# 런타임 환경(local/dev/stg/prod/test)을 판별해 환경 파일을 로드한다.
RUNTIME_ENV = RuntimeEnvironmentLoader().load()

# NOTE:
# .env 로딩 이후에 앱 팩토리를 import해야, lifespan에서 읽는 설정이
# 최신 환경 변수를 반영한다.
from tarot_reading.api.app import create_app  # noqa: E402

app = create_app()
