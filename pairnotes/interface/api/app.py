"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pairnotes.application.session import SessionRegistry
from pairnotes.config import Settings
from pairnotes.domain.error import DomainError
from pairnotes.interface.api.routes import (
    auth,
    health,
    notes,
    pair,
    profile,
    reports,
)
from pairnotes.interface.error import NotAuthenticatedError, domain_error_response
from pairnotes.util.di.container import create_container, setup_di
from pairnotes.util.observability import instrument_fastapi, instrument_httpx


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Stop background pair sessions and close the container on shutdown."""
    yield
    container: AsyncContainer = app.state.dishka_container
    registry = await container.get(SessionRegistry)
    await registry.stop_all()
    await container.close()


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    level = logfire.warn if exc.retryable else logfire.info
    level(
        "Request failed with domain error",
        path=request.url.path,
        error_kind=exc.kind.value,
        error=exc.message,
    )
    return domain_error_response(exc)


async def handle_not_authenticated(
    request: Request, exc: NotAuthenticatedError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "not_authenticated", "message": exc.message},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container by default
    """
    settings = Settings()

    # Instrument httpx for outbound HTTP requests
    instrument_httpx()

    app_instance = FastAPI(
        title="Pairnotes API",
        description="Backend API for Pairnotes - shared notes and weekly summaries for pairs",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.add_exception_handler(DomainError, handle_domain_error)
    app_instance.add_exception_handler(NotAuthenticatedError, handle_not_authenticated)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(profile.router)
    app_instance.include_router(pair.router)
    app_instance.include_router(notes.router)
    app_instance.include_router(reports.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
