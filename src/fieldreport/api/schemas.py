"""Pydantic request/response models for the fieldreport API.

These are the API contract — decoupled from the internal domain dataclasses.
We bridge them using dataclasses.asdict() in the route handlers.
"""

from pydantic import BaseModel, Field

from fieldreport.core.types import ReportDraft, UrgencyLevel


class DraftModel(BaseModel):
    """A report draft as held by the form."""

    region: str = ""
    province: str = ""
    commune: str = ""
    douar: str = ""
    urgency: UrgencyLevel = UrgencyLevel.MEDIUM
    damage: str = ""
    needs: str = ""
    phone: str = Field("", examples=["0612345678"])
    latitude: str = "0.000000"
    longitude: str = "0.000000"
    map_link: str = ""

    def to_draft(self) -> ReportDraft:
        return ReportDraft(**self.model_dump())


class FieldChangeRequest(BaseModel):
    """Request body for POST /api/v1/draft/change."""

    draft: DraftModel
    field: str = Field(..., examples=["province"])
    value: str


class PositionRequest(BaseModel):
    """Request body for POST /api/v1/draft/position; null coordinates mean no fix."""

    draft: DraftModel
    latitude: float | None = None
    longitude: float | None = None


class OptionsResponse(BaseModel):
    regions: list[str] = []
    provinces: list[str] = []
    communes: list[str] = []
    douars: list[str] = []
    loading: bool = False
    error: str | None = None
    error_kind: str | None = None


class RowWarningResponse(BaseModel):
    line: int
    message: str
    cells: int = 0


class RefreshResponse(BaseModel):
    rows: int
    warnings: list[RowWarningResponse] = []
    error: str | None = None
    error_kind: str | None = None


class SubmissionResponse(BaseModel):
    region: str
    province: str
    commune: str
    douar: str
    urgency: str = ""
    damage: str = ""
    needs: str = ""
    phone: str = ""
    location_xy: str = ""
    map_link: str = ""
    matched: bool = False


class LogsResponse(BaseModel):
    logs: list[SubmissionResponse]
    total: int
    mode: str
    loading: bool = False
    error: str | None = None
    error_kind: str | None = None


class MapPointResponse(BaseModel):
    lat: float
    lng: float
    urgency: UrgencyLevel | None = None
    color: str
    douar: str = ""
    commune: str = ""
    damage: str = ""
    phone: str = ""
    map_link: str = ""


class MapPointsResponse(BaseModel):
    points: list[MapPointResponse]
    center: tuple[float, float]
    skipped: int = 0


class SubmitResponse(BaseModel):
    success: bool
    message: str
    acknowledged: bool = False
    draft: DraftModel


class ErrorResponse(BaseModel):
    detail: str | dict
