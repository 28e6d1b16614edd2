"""API route handlers for fieldreport.

GET  /api/v1/options          — cascading select options
GET  /api/v1/logs             — ranked or filtered submission log
GET  /api/v1/map/points       — plottable submissions
GET  /api/v1/urgency-levels   — urgency tiers and labels
POST /api/v1/reports          — validate and submit a draft
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request

from fieldreport.api.schemas import (
    DraftModel,
    ErrorResponse,
    FieldChangeRequest,
    LogsResponse,
    MapPointResponse,
    MapPointsResponse,
    OptionsResponse,
    PositionRequest,
    RefreshResponse,
    SubmissionResponse,
    SubmitResponse,
)
from fieldreport.config import settings
from fieldreport.core.types import URGENCY_LABELS, Selection, UrgencyLevel
from fieldreport.pipeline.draft import (
    DraftValidationError,
    apply_field_change,
    apply_position,
    new_draft,
)
from fieldreport.pipeline.mapping import DEFAULT_CENTER
from fieldreport.pipeline.ranking import FIELD_WEIGHTS, SearchMode, is_match
from fieldreport.state import AppState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["reports"])


def get_state(app: FastAPI) -> AppState:
    """The process-wide AppState, created from settings on first use."""
    state = getattr(app.state, "fieldreport", None)
    if state is None:
        state = AppState(
            admin_csv_url=settings.admin_csv_url,
            logs_csv_url=settings.logs_csv_url,
            submit_url=settings.submit_url,
            region_allow_list=settings.allowed_regions,
        )
        app.state.fieldreport = state
    return state


# ---------------------------------------------------------------------------
# Administrative hierarchy
# ---------------------------------------------------------------------------

@router.get("/options", response_model=OptionsResponse)
async def options(request: Request, region: str = "", province: str = "", commune: str = ""):
    """Options for each select given the levels chosen so far."""
    state = get_state(request.app)
    derived = state.options(Selection(region=region, province=province, commune=commune))
    return OptionsResponse(
        **asdict(derived),
        loading=state.admin_loading,
        error=state.admin_error,
        error_kind=state.admin_error_kind,
    )


@router.post("/admin/refresh", response_model=RefreshResponse)
async def refresh_admin(request: Request):
    state = get_state(request.app)
    await state.load_admin_data()
    return RefreshResponse(
        rows=len(state.admin_rows),
        warnings=[asdict(w) for w in state.admin_warnings],
        error=state.admin_error,
        error_kind=state.admin_error_kind,
    )


# ---------------------------------------------------------------------------
# Submission log
# ---------------------------------------------------------------------------

@router.get("/logs", response_model=LogsResponse)
async def logs(
    request: Request,
    mode: SearchMode = SearchMode.RANK,
    q: str = "",
    region: str = "",
    province: str = "",
    commune: str = "",
    douar: str = "",
    urgency: str = "",
    damage: str = "",
    needs: str = "",
    phone: str = Query("", description="Substring of the reporter's phone number"),
):
    """Submission log for the dashboard.

    In ``rank`` mode the per-column queries float matches to the top and
    nothing is hidden; in ``filter`` mode only rows containing ``q`` remain.
    """
    state = get_state(request.app)
    values = {
        "region": region, "province": province, "commune": commune, "douar": douar,
        "urgency": urgency, "damage": damage, "needs": needs, "phone": phone,
    }
    filters = {k: v for k, v in values.items() if k in FIELD_WEIGHTS and v}
    rows = state.search(filters, q, mode)
    return LogsResponse(
        logs=[SubmissionResponse(**asdict(row), matched=is_match(row, filters)) for row in rows],
        total=len(rows),
        mode=SearchMode(mode).value,
        loading=state.logs_loading,
        error=state.logs_error,
        error_kind=state.logs_error_kind,
    )


@router.post("/logs/refresh", response_model=RefreshResponse)
async def refresh_logs(request: Request):
    state = get_state(request.app)
    await state.refresh_logs()
    return RefreshResponse(
        rows=len(state.logs),
        warnings=[asdict(w) for w in state.logs_warnings],
        error=state.logs_error,
        error_kind=state.logs_error_kind,
    )


@router.get("/map/points", response_model=MapPointsResponse)
async def map_points(request: Request):
    state = get_state(request.app)
    points = state.points()
    return MapPointsResponse(
        points=[
            MapPointResponse(
                lat=p.lat,
                lng=p.lng,
                urgency=p.urgency,
                color=p.color,
                douar=p.row.douar,
                commune=p.row.commune,
                damage=p.row.damage,
                phone=p.row.phone,
                map_link=p.row.map_link,
            )
            for p in points
        ],
        center=DEFAULT_CENTER,
        skipped=len(state.logs) - len(points),
    )


# ---------------------------------------------------------------------------
# Draft editing and submission
# ---------------------------------------------------------------------------

@router.get("/urgency-levels")
async def urgency_levels():
    """Urgency tiers with the labels written to the sheet, lowest first."""
    return [{"value": level.value, "label": label} for level, label in URGENCY_LABELS.items()]


@router.get("/draft/new", response_model=DraftModel)
async def draft_new():
    draft = new_draft(
        latitude=settings.default_latitude,
        longitude=settings.default_longitude,
        urgency=UrgencyLevel(settings.default_urgency),
    )
    return DraftModel(**asdict(draft))


@router.post("/draft/change", response_model=DraftModel, responses={422: {"model": ErrorResponse}})
async def draft_change(body: FieldChangeRequest):
    """Apply one field edit with cascading resets."""
    try:
        updated = apply_field_change(body.draft.to_draft(), body.field, body.value)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e.args[0]))
    return DraftModel(**asdict(updated))


@router.post("/draft/position", response_model=DraftModel)
async def draft_position(body: PositionRequest):
    updated = apply_position(body.draft.to_draft(), body.latitude, body.longitude)
    return DraftModel(**asdict(updated))


@router.post(
    "/reports",
    response_model=SubmitResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Required fields missing"},
        502: {"model": ErrorResponse, "description": "Report could not be sent"},
    },
)
async def submit(request: Request, body: DraftModel):
    """Validate and send a report; returns the cleared draft on success."""
    state = get_state(request.app)
    try:
        result, next_draft = await state.submit(body.to_draft())
    except DraftValidationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "missing": e.missing})

    if not result.success:
        raise HTTPException(status_code=502, detail=result.message)

    return SubmitResponse(
        success=result.success,
        message=result.message,
        acknowledged=result.acknowledged,
        draft=DraftModel(**asdict(next_draft)),
    )
