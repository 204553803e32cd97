"""
Triage Bot - FastAPI Application

Головний файл FastAPI додатку.

Запуск:
    uvicorn triage_bot.api.app:app --host 0.0.0.0 --port 8000

    або:

    python scripts/run_api.py

Змінні середовища: KB_PATH, STORAGE_BACKEND (json|sqlite|none), CASES_DIR,
SQLITE_PATH, HISTORY_LIMIT, TRIAGE_CONFIG, API_HOST, API_PORT, LOG_LEVEL.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .config import APIConfig
from .dependencies import AppState
from .routes import health_router, messages_router, cases_router


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(api_config: Optional[APIConfig] = None) -> FastAPI:
    """
    Створити FastAPI додаток.

    Args:
        api_config: Конфігурація (за замовчуванням з environment variables)

    Returns:
        FastAPI
    """
    api_config = api_config or APIConfig.from_env()
    configure_logging(api_config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifecycle manager: завантаження бази симптомів при старті,
        збереження активних випадків при зупинці.
        """
        logger.info("Triage Bot API starting...")
        state = AppState()
        try:
            state.initialize(api_config)
        except Exception:
            logger.exception("Failed to initialize Triage Bot API")
            raise
        app.state.triage = state
        logger.info("Swagger UI: http://%s:%s/docs", api_config.host, api_config.port)

        yield

        logger.info("Triage Bot API stopping, flushing active cases...")
        state.shutdown()

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=api_config.cors_allow_credentials,
        allow_methods=api_config.cors_allow_methods,
        allow_headers=api_config.cors_allow_headers,
    )

    # Middleware для логування запитів
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if request.url.path.startswith(api_config.api_prefix):
            logger.info(
                "%s %s -> %s (%.1fms)",
                request.method, request.url.path, response.status_code, process_time * 1000,
            )
        return response

    # Глобальний обробник помилок
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if api_config.debug else None,
            },
        )

    # Підключаємо роутери
    app.include_router(health_router)
    app.include_router(messages_router, prefix=api_config.api_prefix)
    app.include_router(cases_router, prefix=api_config.api_prefix)

    return app


app = create_app()
