#!/usr/bin/env python3

"""
Main application entry point for the portfolio content API.

Architecture: FastAPI application with a SQLAlchemy database, a cookie/JWT admin
session and a session gate in front of the browser admin area.
Key Features: Lifecycle management, database health checks, error mapping, CORS configuration.
"""

import errno
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.about import router as about_router
from app.api.admin import router as admin_router
from app.api.auth import router as auth_router
from app.api.contacts import router as contacts_router
from app.api.projects import router as projects_router
from app.api.upload import router as upload_router
from app.config import settings
from app.db import check_db_connection, close_db, init_db
from app.middleware.session_gate import SessionGateMiddleware
from app.services.token_service import TokenService, build_token_service
from app.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Portfolio API starting...")
    try:
        await init_db()
        await check_db_connection()
    except Exception as e:
        logger.critical(f"Content database unavailable at startup: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("Portfolio API ready.")
    yield

    logger.info("Portfolio API shutting down...")
    await close_db()


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def create_app(token_service: TokenService | None = None):
    # Raises when JWT_SECRET is unset
    token_service = token_service or build_token_service()

    app = FastAPI(title="Portfolio API", lifespan=lifespan)
    app.state.token_service = token_service

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = _validation_errors(exc)
        logger.info(f"Validation error on {request.method} {request.url.path}: {errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request", "errors": errors},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Database error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(OSError)
    async def connection_error_handler(request: Request, exc: OSError):
        logger.error(
            f"OSError on {request.method} {request.url.path}: {exc} (errno {exc.errno})"
        )
        if exc.errno in (errno.ETIMEDOUT, errno.ECONNREFUSED):
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": settings.db_unavailable_hint},
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.get("/", tags=["Health"])
    async def read_root():
        """API health check endpoint."""
        return {"status": "ok", "service": "portfolio-api"}

    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(contacts_router)
    app.include_router(about_router)
    app.include_router(upload_router)
    app.include_router(admin_router)

    app.add_middleware(
        SessionGateMiddleware,
        token_service=token_service,
        protected_prefix=settings.admin_path_prefix,
        login_path=settings.admin_login_path,
        cookie_name=settings.auth_cookie_name,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    return app


def main():
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting Portfolio API server on {host}:{port}")

    try:
        uvicorn.run(
            "main:create_app",
            factory=True,
            host=host,
            port=port,
            workers=settings.server_workers,
        )
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
