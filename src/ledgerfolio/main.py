"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ledgerfolio import __version__
from ledgerfolio.config.settings import get_settings
from ledgerfolio.config.logging_config import setup_logging
from ledgerfolio.repositories.sqlalchemy.database import init_db
from ledgerfolio.api.routers import (
    portfolios_router,
    assets_router,
    records_router,
    views_router,
    tools_router,
)
from ledgerfolio.core.exceptions import AppError, NotFoundError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Multi-currency portfolio ledger with point-in-time replay",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(portfolios_router)
app.include_router(assets_router)
app.include_router(records_router)
app.include_router(views_router)
app.include_router(tools_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
