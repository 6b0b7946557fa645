"""FastAPI router for parcel and document endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from parcelwise.core.errors import ValidationError
from parcelwise.resolution.service import ResolutionResult
from parcelwise.zoning.models import ParcelInfo

router = APIRouter()


class ResolveRequest(BaseModel):
    query: str
    include_zoning: bool = True


class DocumentRequest(BaseModel):
    url: str


class DocumentResponse(BaseModel):
    url: str
    resolved_url: str | None = None
    error: str | None = None


# --- Parcel endpoints ---


@router.get("/api/parcels/search", response_model=ResolutionResult)
async def search_parcels(request: Request, q: str = "") -> ResolutionResult:
    """Candidate parcels for an identifier or free-text query."""
    service = request.app.state.resolution_service
    try:
        return await service.search(q)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/api/parcels/at", response_model=ResolutionResult)
async def parcel_at(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
) -> ResolutionResult:
    """Parcel containing a point."""
    return await request.app.state.resolution_service.parcel_at(lat, lng)


@router.get("/api/parcels/info", response_model=ParcelInfo)
async def parcel_info(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
) -> ParcelInfo:
    """Land use and zoning at a point."""
    return await request.app.state.resolution_service.parcel_info(lat, lng)


@router.post("/api/parcels/resolve", response_model=ResolutionResult)
async def resolve_parcel(body: ResolveRequest, request: Request) -> ResolutionResult:
    """Search for a parcel and probe land use and zoning at its centroid."""
    service = request.app.state.resolution_service
    try:
        return await service.resolve(body.query, include_zoning=body.include_zoning)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# --- Document endpoints ---


@router.post("/api/documents/resolve", response_model=DocumentResponse)
async def resolve_document(body: DocumentRequest, request: Request) -> DocumentResponse:
    """Resolve an act reference to a downloadable document URL."""
    resolved = await request.app.state.document_resolver.resolve(body.url)
    if resolved is None:
        return DocumentResponse(url=body.url, error="No downloadable document found")
    return DocumentResponse(url=body.url, resolved_url=resolved)
