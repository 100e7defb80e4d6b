import uvicorn
from fastapi import FastAPI

from flashdeck.api.errors import register_error_handlers
from flashdeck.api.middleware import RequestContextMiddleware
from flashdeck.api.routes.cards import router as cards_router
from flashdeck.api.routes.decks import router as decks_router
from flashdeck.api.routes.health import router as health_router
from flashdeck.api.routes.streak import router as streak_router
from flashdeck.api.routes.study_sessions import router as study_sessions_router
from flashdeck.core.config import get_settings
from flashdeck.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Flashdeck API",
        version="0.1.0",
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(decks_router)
    app.include_router(cards_router)
    app.include_router(study_sessions_router)
    app.include_router(streak_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "flashdeck.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
