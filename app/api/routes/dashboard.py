"""
Dashboard API routes.

Preferences, listings, reports and heatmaps behind the session guard. The
collaborators are placeholders; every response carries ``implemented: false``.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import require_identity
from app.schemas.dashboard import ListingCreateRequest, PreferencesRequest, ReportRequest
from app.services.dashboard_service import (
    HeatmapService,
    ListingsService,
    PreferencesService,
    ReportsService,
)
from app.services.session_service import Identity

# ---------------------------------------------------------
# Router initialization for dashboard endpoints
# ---------------------------------------------------------

router = APIRouter()
preferences_service = PreferencesService()
listings_service = ListingsService()
reports_service = ReportsService()
heatmap_service = HeatmapService()


@router.get("/user/preferences")
def get_preferences(identity: Identity = Depends(require_identity)):
    return preferences_service.get_preferences(identity.user.id).to_response()


@router.post("/user/preferences")
def save_preferences(body: PreferencesRequest, identity: Identity = Depends(require_identity)):
    preferences = body.model_dump(exclude_none=True)
    return preferences_service.save_preferences(identity.user.id, preferences).to_response()


@router.get("/user/listings")
def get_listings(identity: Identity = Depends(require_identity)):
    return listings_service.get_listings(identity.user.id).to_response()


@router.post("/user/listings", status_code=201)
def add_listing(body: ListingCreateRequest, identity: Identity = Depends(require_identity)):
    result = listings_service.add_listing(identity.user.id, body.model_dump(exclude_none=True))
    return JSONResponse(status_code=201, content=result.to_response())


@router.delete("/user/listings/{listing_id}")
def delete_listing(listing_id: int, identity: Identity = Depends(require_identity)):
    return listings_service.delete_listing(identity.user.id, listing_id).to_response()


@router.get("/user/heatmaps/{audience}")
def get_heatmap(audience: str, identity: Identity = Depends(require_identity)):
    try:
        result = heatmap_service.get_heatmap(identity.user.id, audience)
    except KeyError:
        return JSONResponse(status_code=404, content={"message": f"Unknown heatmap audience '{audience}'."})
    return result.to_response()


@router.post("/reports/requests", status_code=202)
def request_report(body: ReportRequest, identity: Identity = Depends(require_identity)):
    result = reports_service.request_report(identity.user.id, body.model_dump(exclude_none=True))
    return JSONResponse(status_code=202, content=result.to_response())
