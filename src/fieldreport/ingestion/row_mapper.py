"""Positional mapping of parsed CSV rows into typed sheet records.

Both sheets are read by column index, never by header name: the first
row is skipped whatever it says. Short rows are padded with empty
strings so one bad line never drops the feed, but each one is reported
as a RowWarning so the operator can see the sheet drifting.
"""

import logging

from fieldreport.core.types import AdministrativeRow, MappedRows, RowWarning, SubmissionRow

logger = logging.getLogger(__name__)

ADMIN_COLUMNS = ("region", "province", "commune", "douar")

# Column order is a hard contract with the submission sheet
SUBMISSION_COLUMNS = (
    "region",
    "province",
    "commune",
    "douar",
    "urgency",
    "damage",
    "needs",
    "phone",
    "location_xy",
    "map_link",
)


def _cells(raw: list[str], width: int) -> list[str]:
    padded = [cell.strip() for cell in raw[:width]]
    padded.extend([""] * (width - len(padded)))
    return padded


def _map_rows(
    rows: list[list[str]],
    columns: tuple[str, ...],
    record_type: type[AdministrativeRow] | type[SubmissionRow],
    label: str,
) -> MappedRows:
    result = MappedRows()
    width = len(columns)

    # Line numbers are 1-based and count the skipped header
    for line, raw in enumerate(rows[1:], start=2):
        if len(raw) < width:
            result.warnings.append(RowWarning(
                line=line,
                message=f"expected {width} cells, got {len(raw)}; missing cells left empty",
                cells=len(raw),
            ))

        values = dict(zip(columns, _cells(raw, width)))
        if not values["region"]:
            result.discarded += 1
            continue
        result.records.append(record_type(**values))

    if result.warnings or result.discarded:
        logger.warning(
            "%s rows: %d short, %d discarded without region",
            label,
            len(result.warnings),
            result.discarded,
            extra={"rows": len(result.records), "warnings": len(result.warnings)},
        )
    return result


def map_admin_rows(rows: list[list[str]]) -> MappedRows:
    """Map parsed rows (header first) to AdministrativeRow records."""
    return _map_rows(rows, ADMIN_COLUMNS, AdministrativeRow, "Administrative")


def map_submission_rows(rows: list[list[str]]) -> MappedRows:
    """Map parsed rows (header first) to SubmissionRow records."""
    return _map_rows(rows, SUBMISSION_COLUMNS, SubmissionRow, "Submission")
