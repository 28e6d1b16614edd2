"""Domain types for the fieldreport disaster-reporting service.

All shared dataclasses and enums live here to prevent circular imports
and establish a single source of truth for the domain model. Every other
module imports from here.
"""

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Urgency
# ---------------------------------------------------------------------------

class UrgencyLevel(str, Enum):
    """Closed four-tier severity classification attached to a report."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


URGENCY_LABELS: dict[UrgencyLevel, str] = {
    UrgencyLevel.LOW: "1- منخفض",
    UrgencyLevel.MEDIUM: "2- متوسط",
    UrgencyLevel.HIGH: "3- مرتفع",
    UrgencyLevel.CRITICAL: "4- حرج جداً",
}


# ---------------------------------------------------------------------------
# Sheet rows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AdministrativeRow:
    """One region → province → commune → douar mapping from the reference sheet."""

    region: str
    province: str
    commune: str
    douar: str


@dataclass(frozen=True)
class SubmissionRow:
    """One field report as read back from the submission log sheet."""

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


@dataclass(frozen=True)
class RowWarning:
    """A recoverable problem found while mapping one CSV line."""

    line: int
    message: str
    cells: int = 0


@dataclass
class MappedRows:
    """Typed records plus the warnings accumulated while producing them."""

    records: list[AdministrativeRow | SubmissionRow] = field(default_factory=list)
    warnings: list[RowWarning] = field(default_factory=list)
    discarded: int = 0


# ---------------------------------------------------------------------------
# Form state
# ---------------------------------------------------------------------------

MAP_LINK_TEMPLATE = "https://www.google.com/maps?q={lat},{lng}"


def build_map_link(latitude: str, longitude: str) -> str:
    return MAP_LINK_TEMPLATE.format(lat=latitude, lng=longitude)


@dataclass(frozen=True)
class Selection:
    """The administrative levels that drive option derivation."""

    region: str = ""
    province: str = ""
    commune: str = ""


@dataclass
class ReportDraft:
    """The in-progress report being composed in the form.

    ``map_link`` is derived: it is rebuilt from the coordinate pair on
    every construction (including ``dataclasses.replace``), so a stale
    or missing link passed in is never kept.
    """

    region: str = ""
    province: str = ""
    commune: str = ""
    douar: str = ""
    urgency: UrgencyLevel = UrgencyLevel.MEDIUM
    damage: str = ""
    needs: str = ""
    phone: str = ""
    latitude: str = "0.000000"
    longitude: str = "0.000000"
    map_link: str = ""

    def __post_init__(self):
        self.map_link = build_map_link(self.latitude, self.longitude)

    def to_payload(self) -> dict[str, str]:
        """Serialize using the column names the write endpoint expects."""
        return {
            "region": self.region,
            "province": self.province,
            "commune": self.commune,
            "nom_douar": self.douar,
            "niveau_urgence": self.urgency.value,
            "nature_dommages": self.damage,
            "besoins_essentiels": self.needs,
            "numero_telephone": self.phone,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "lien_maps": build_map_link(self.latitude, self.longitude),
        }


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

@dataclass
class HierarchyOptions:
    """Candidate values at each level of the administrative hierarchy."""

    regions: list[str] = field(default_factory=list)
    provinces: list[str] = field(default_factory=list)
    communes: list[str] = field(default_factory=list)
    douars: list[str] = field(default_factory=list)


@dataclass
class MapPoint:
    """A submission that can be plotted on the distribution map."""

    lat: float
    lng: float
    urgency: UrgencyLevel | None
    color: str
    row: SubmissionRow


@dataclass
class SubmitResult:
    """Outcome of a report submission.

    ``acknowledged`` is False whenever the transport cannot read the
    server's response, so success only means the request left the client.
    """

    success: bool
    message: str
    acknowledged: bool = False
    status_code: int | None = None
