"""Search over the submission log for the dashboard table.

Two modes exist:

- ``rank`` (default): every row stays visible; rows matching the
  per-column queries are scored and floated to the top.
- ``filter``: a single free-text query hides rows that do not contain it.

Both are pure functions over (logs, query) and are recomputed on every
keystroke, so ranking must be stable: equal scores keep input order.
"""

from enum import Enum

from fieldreport.core.types import SubmissionRow

# A douar match outweighs everything else combined except a phone match
FIELD_WEIGHTS: dict[str, int] = {
    "douar": 100,
    "phone": 50,
    "region": 10,
    "province": 10,
    "commune": 10,
    "urgency": 5,
    "damage": 2,
    "needs": 2,
}

FILTER_FIELDS = ("douar", "commune", "province", "region", "phone", "damage")


class SearchMode(str, Enum):
    RANK = "rank"
    FILTER = "filter"


def score_log(log: SubmissionRow, filters: dict[str, str]) -> int:
    """Sum the weights of every non-empty query found in its field (case-sensitive)."""
    score = 0
    for field, weight in FIELD_WEIGHTS.items():
        query = filters.get(field, "")
        if query and query in getattr(log, field):
            score += weight
    return score


def rank_logs(logs: list[SubmissionRow], filters: dict[str, str] | None = None) -> list[SubmissionRow]:
    """Order logs by descending score; ties keep their input order."""
    filters = filters or {}
    if not any(filters.get(field) for field in FIELD_WEIGHTS):
        return list(logs)
    return sorted(logs, key=lambda log: -score_log(log, filters))


def filter_logs(logs: list[SubmissionRow], query: str = "") -> list[SubmissionRow]:
    """Keep only logs whose place names, phone or damage contain ``query`` (case-insensitive)."""
    needle = query.strip().lower()
    if not needle:
        return list(logs)
    return [
        log for log in logs
        if any(needle in getattr(log, field).lower() for field in FILTER_FIELDS)
    ]


def search_logs(
    logs: list[SubmissionRow],
    filters: dict[str, str] | None = None,
    query: str = "",
    mode: SearchMode = SearchMode.RANK,
) -> list[SubmissionRow]:
    if SearchMode(mode) is SearchMode.FILTER:
        return filter_logs(logs, query)
    return rank_logs(logs, filters)


def is_match(log: SubmissionRow, filters: dict[str, str]) -> bool:
    """True if any active query hits this row; used to highlight it in the table."""
    return score_log(log, filters) > 0
