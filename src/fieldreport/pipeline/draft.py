"""Report draft state: cascading resets, coordinates and map link.

Administrative fields form a chain (region → province → commune → douar).
Changing a level to a different value clears every level below it so the
draft never holds an address that mixes two branches of the hierarchy.
Coordinates are independent of that chain; whenever either one changes
the map link is rebuilt from the pair.
"""

from dataclasses import replace

from fieldreport.core.types import ReportDraft, UrgencyLevel, build_map_link

ADMIN_LEVELS = ("region", "province", "commune", "douar")
COORDINATE_FIELDS = ("latitude", "longitude")
TEXT_FIELDS = ("damage", "needs", "phone")

# Checked before any network call
REQUIRED_FIELDS = ("region", "province", "commune", "douar", "damage", "needs", "phone")

EDITABLE_FIELDS = ADMIN_LEVELS + COORDINATE_FIELDS + TEXT_FIELDS + ("urgency",)


class DraftValidationError(ValueError):
    """Required draft fields are empty."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = missing


def format_coordinate(value: float) -> str:
    """Six decimals, the precision shown in the form and used in the link."""
    return f"{value:.6f}"


def new_draft(
    latitude: str = "0.000000",
    longitude: str = "0.000000",
    urgency: UrgencyLevel = UrgencyLevel.MEDIUM,
) -> ReportDraft:
    """Create an empty draft with the given coordinate and urgency defaults."""
    return ReportDraft(
        urgency=urgency,
        latitude=latitude,
        longitude=longitude,
    )


def apply_field_change(current: ReportDraft, field: str, value) -> ReportDraft:
    """Return a new draft with ``field`` set to ``value``.

    Re-selecting the value a field already holds is a no-op, so a
    redundant pick never wipes the levels below it.

    Raises:
        KeyError: ``field`` is not an editable draft field.
        ValueError: ``value`` is not a valid urgency level.
    """
    if field not in EDITABLE_FIELDS:
        raise KeyError(f"Unknown draft field: {field!r}")

    if field == "urgency":
        value = UrgencyLevel(value)
    if getattr(current, field) == value:
        return current

    updated = replace(current, **{field: value})

    if field in ADMIN_LEVELS:
        for below in ADMIN_LEVELS[ADMIN_LEVELS.index(field) + 1:]:
            setattr(updated, below, "")

    return updated


def apply_position(current: ReportDraft, latitude: float | None, longitude: float | None) -> ReportDraft:
    """Apply a geolocation fix; a missing fix leaves the draft unchanged."""
    if latitude is None or longitude is None:
        return current
    return replace(current, latitude=format_coordinate(latitude), longitude=format_coordinate(longitude))


def validate_draft(draft: ReportDraft) -> None:
    """Raise DraftValidationError listing every empty required field."""
    missing = [name for name in REQUIRED_FIELDS if not str(getattr(draft, name)).strip()]
    if missing:
        raise DraftValidationError(missing)


def reset_after_submit(draft: ReportDraft) -> ReportDraft:
    """Clear the address and free text; keep urgency and coordinates."""
    return replace(
        draft,
        region="",
        province="",
        commune="",
        douar="",
        damage="",
        needs="",
        phone="",
    )
