# auth_api/main.py

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth_api.api.v1.api import api_router
from auth_api.core.config import Settings, get_settings
from auth_api.core.logging_config import get_logging_config, setup_logging
from auth_api.core.security import build_password_hasher, build_token_issuer
from auth_api.db.init_db import init_db
from auth_api.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("auth_api.requests")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    # Everything request handlers need hangs off app.state; nothing global.
    engine = build_engine(settings)
    token_issuer = build_token_issuer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info("%s %s ready", settings.PROJECT_NAME, settings.VERSION)
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = build_password_hasher(settings)
    app.state.token_issuer = token_issuer

    # ---------- CORS ----------
    origins = settings.backend_cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- REQUEST LOG ----------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        request_logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    # ---------- ERRORS ----------
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={"error": 404, "route": request.url.path, "message": "Not Found"},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": 500, "message": "Server Error"},
        )

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


def start(port: Optional[int] = None) -> None:
    settings = get_settings()
    app = create_application(settings)

    host = os.environ.get("API_HOST", "0.0.0.0")
    port = port or int(os.environ.get("PORT", "3000"))
    logger.info("Server up on %s:%s", host, port)
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_config=get_logging_config(settings.log_level),
    )
