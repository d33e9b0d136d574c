"""
transfer_bank/app.py

FastAPI application factory for the transfer-bank service.

This module wires together:
- Logging configuration (file-based under LOG_DIR)
- The store handle (one Database per app, disposed on shutdown)
- CORS and request logging middleware
- Domain routers under transfer_bank/api/ (usuarios, transferencias)
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from transfer_bank.api import transfers_router, users_router
from transfer_bank.config import Settings
from transfer_bank.db import Database
from transfer_bank.logging_config import get_logger, setup_logging

logger = get_logger("transfer_bank")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()

    setup_logging(settings.log_level, settings.log_dir)

    if database is None:
        database = Database(settings.database_url, echo=settings.db_echo)

    app = FastAPI(title="Transfer Bank API", version="1.0.0")
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Lightweight request logger to help trace traffic.
        """
        try:
            body = await request.body()
            logger.info(
                "HTTP %s %s from %s body=%s",
                request.method,
                request.url.path,
                request.client.host if request.client else "?",
                body.decode(errors="ignore")[:200],
            )
        except Exception:
            logger.exception("Failed to read request body for logging")
        response = await call_next(request)
        logger.info("HTTP %s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"message": "Ruta desconocida."})
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.get("/api/health")
    async def health():
        """
        Health check; also verifies the store answers.
        """
        try:
            await database.ping()
        except SQLAlchemyError as e:
            logger.exception("Health check failed: %s", e)
            return JSONResponse(status_code=503, content={"status": "unhealthy"})
        return {"status": "healthy"}

    app.include_router(users_router)
    app.include_router(transfers_router)

    @app.on_event("startup")
    async def on_startup():
        logger.info("Transfer-bank starting up (database=%s)", database.engine.url.render_as_string(hide_password=True))
        if settings.create_tables:
            await database.create_all()

    @app.on_event("shutdown")
    async def on_shutdown():
        try:
            await database.dispose()
        except Exception:
            logger.exception("Error disposing engine on shutdown")
        logger.info("Transfer-bank shutting down")

    return app
