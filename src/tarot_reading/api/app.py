"""
목적: FastAPI 앱 팩토리를 제공한다.
설명: lifespan에서 설정을 읽어 애플리케이션 컨텍스트를 조립·시작하고, 종료 시 정리한다.
    테스트는 미리 만든 컨텍스트를 주입해 같은 앱을 띄운다.
디자인 패턴: 팩토리 메서드
참조: src/tarot_reading/api/context.py, src/tarot_reading/api/main.py
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from tarot_reading.api.context import AppContext
from tarot_reading.api.health.routers.server import router as health_router
from tarot_reading.api.reading.routers import router as reading_router
from tarot_reading.shared.config import AppSettings

ContextFactory = Callable[[], AppContext]


def _default_context_factory() -> AppContext:
    return AppContext.build(AppSettings.load())


def create_app(
    context_factory: Optional[ContextFactory] = None,
    start_background: bool = True,
) -> FastAPI:
    """앱을 만든다.

    Args:
        context_factory: 컨텍스트 생성 함수. 없으면 `TAROT_` 환경 변수로 설정을 읽어 만든다.
        start_background: 워커풀/프로버/리미터 정리 작업을 시작할지 여부.
    """

    factory = context_factory or _default_context_factory

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 수명 동안 컨텍스트를 유지한다."""
        context = factory()
        app.state.context = context
        if start_background:
            context.start()
        try:
            yield
        finally:
            context.stop()

    app = FastAPI(title="tarot-reading", lifespan=lifespan)
    app.include_router(health_router)
    app.include_router(reading_router)

    @app.get("/", include_in_schema=False)
    def redirect_to_docs():
        """기본 접속 시 문서 페이지로 리다이렉트한다."""
        return RedirectResponse(url="/docs")

    return app
