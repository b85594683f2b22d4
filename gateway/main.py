# gateway/main.py
# Application factory and process entry point

from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from gateway.config import Settings, get_settings
from gateway.db.base import build_engine, build_session_factory
from gateway.db.bootstrap import bootstrap_schemas
from gateway.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from gateway.observability.logger import configure_logging
from gateway.repositories.view_repository import ViewRepository
from gateway.routers.health import router as health_router
from gateway.routers.views import router as views_router
from gateway.utils.logger import log_info
from gateway.utils.telemetry import init_otel, instrument_engine


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the gateway app. The engine is opened and closed by the lifespan."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)

        engine = build_engine(settings)
        if settings.OTEL_ENABLED:
            instrument_engine(engine)
        # Schemas must exist before the repository accepts traffic
        await bootstrap_schemas(engine)

        app.state.engine = engine
        app.state.view_repository = ViewRepository(
            build_session_factory(engine),
            version=settings.VERSION,
        )
        log_info(f"Gateway {settings.VERSION} ready ({engine.dialect.name})")
        try:
            yield
        finally:
            log_info("Closing database engine...")
            await engine.dispose()
            log_info("Database engine closed.")

    app = FastAPI(
        title="Aerie Gateway",
        description="Saved UI views for authenticated users",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Error handler is the outermost middleware
    app.add_middleware(ErrorHandlerMiddleware, debug=settings.DEBUG)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(views_router)

    if settings.OTEL_ENABLED:
        init_otel(app=app, service_name=settings.SERVICE_NAME)

    return app


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
