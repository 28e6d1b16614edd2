"""Map plotting of submissions: coordinate parsing and urgency colours.

The log sheet stores position as one ``"lat,lng"`` cell and urgency as
the free-text label the form wrote, which may be the Arabic word, the
leading digit, or an Arabic-Indic digit depending on how the row was
entered. Rows whose position does not parse are left off the map only;
the dashboard table still lists them.
"""

import math

from fieldreport.core.types import MapPoint, SubmissionRow, UrgencyLevel

# Country-wide view used when no user position is known
DEFAULT_CENTER = (31.7917, -7.0926)

UNKNOWN_COLOR = "#64748b"

URGENCY_COLORS: dict[UrgencyLevel, str] = {
    UrgencyLevel.CRITICAL: "#ef4444",
    UrgencyLevel.HIGH: "#f97316",
    UrgencyLevel.MEDIUM: "#fbbf24",
    UrgencyLevel.LOW: "#10b981",
}

# Most severe first: a label mentioning two tiers takes the higher one
_URGENCY_MARKERS: list[tuple[UrgencyLevel, tuple[str, ...]]] = [
    (UrgencyLevel.CRITICAL, ("حرج", "٤", "4", "CRITICAL")),
    (UrgencyLevel.HIGH, ("مرتفع", "٣", "3", "HIGH")),
    (UrgencyLevel.MEDIUM, ("متوسط", "٢", "2", "MEDIUM")),
    (UrgencyLevel.LOW, ("منخفض", "١", "1", "LOW")),
]


def parse_location(location_xy: str) -> tuple[float, float] | None:
    """Parse ``"lat,lng"`` into two finite floats, or None if malformed."""
    if not location_xy:
        return None
    parts = location_xy.split(",")
    if len(parts) < 2:
        return None
    try:
        lat = float(parts[0].strip())
        lng = float(parts[1].strip())
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return lat, lng


def urgency_tier(label: str) -> UrgencyLevel | None:
    """Best-effort read-back of an urgency label written to the sheet."""
    text = label.upper()
    for level, markers in _URGENCY_MARKERS:
        if any(marker in text for marker in markers):
            return level
    return None


def map_points(logs: list[SubmissionRow]) -> list[MapPoint]:
    """Plottable points for every log whose position parses."""
    points = []
    for log in logs:
        position = parse_location(log.location_xy)
        if position is None:
            continue
        level = urgency_tier(log.urgency)
        points.append(MapPoint(
            lat=position[0],
            lng=position[1],
            urgency=level,
            color=URGENCY_COLORS[level] if level else UNKNOWN_COLOR,
            row=log,
        ))
    return points
