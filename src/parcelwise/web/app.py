"""FastAPI application for parcelwise.

Exposes parcel lookup, land-use and zoning probing, and act document
resolution over a small REST API.

Run with:
    uvicorn parcelwise.web.app:create_app --factory --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from parcelwise import __version__
from parcelwise.cadastre.repository import CadastralRepository, create_cadastral_repository
from parcelwise.core.config import Settings
from parcelwise.documents.resolver import DocumentResolver
from parcelwise.resolution.service import ResolutionService
from parcelwise.web.parcel_router import router as parcel_router
from parcelwise.zoning.prober import ZoningProber

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = __version__


def create_app(
    settings: Settings | None = None,
    repository: CadastralRepository | None = None,
    prober: ZoningProber | None = None,
    document_resolver: DocumentResolver | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators not passed in are built from ``settings``, so tests can
    create isolated app instances with in-memory or mocked services.

    Args:
        settings: Application settings. Defaults to Settings().
        repository: Optional pre-built cadastral repository.
        prober: Optional pre-built zoning prober.
        document_resolver: Optional pre-built document resolver.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if repository is None:
        repository = create_cadastral_repository(settings.cadastre)
    if prober is None:
        prober = ZoningProber(config=settings.maps)
    if document_resolver is None:
        document_resolver = DocumentResolver(config=settings.documents)

    resolution_service = ResolutionService(repository=repository, prober=prober)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("Shutting down, releasing HTTP clients")
        await repository.close()
        await prober.close()
        await document_resolver.close()

    app = FastAPI(
        title="parcelwise",
        description="Parcel lookup with land-use and zoning-plan probing",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.repository = repository
    app.state.prober = prober
    app.state.document_resolver = document_resolver
    app.state.resolution_service = resolution_service

    app.include_router(parcel_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", service="parcelwise")

    return app
