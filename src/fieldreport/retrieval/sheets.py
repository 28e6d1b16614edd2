"""Google Sheets CSV exports — administrative hierarchy and submission log.

Both sheets are read through their public ``export?format=csv`` URL with
plain httpx GETs. A sheet whose sharing is not "anyone with the link"
does not fail with a 4xx: Google redirects to its sign-in page and
answers 200 with HTML, so the body is sniffed before it is parsed.
"""

import logging
import time

import httpx
import mlflow
from mlflow.entities import SpanType

from fieldreport.config import settings
from fieldreport.core.types import MappedRows
from fieldreport.ingestion.csv_parser import parse_csv
from fieldreport.ingestion.row_mapper import map_admin_rows, map_submission_rows

logger = logging.getLogger(__name__)

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache",
    "Pragma": "no-cache",
}

# An HTML page served in place of the CSV export starts with one of these
HTML_PREFIXES = ("<!doctype html", "<html")

ACCESS_REMEDIATION = (
    "The spreadsheet returned a web page instead of CSV data. "
    "Its sharing is probably restricted: open the sheet, choose Share, "
    "and set General access to 'Anyone with the link' (Viewer)."
)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class FetchError(Exception):
    """Base class for sheet read failures."""

    kind = "fetch"

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class HttpError(FetchError):
    """The export endpoint answered with a non-2xx status."""

    kind = "http"

    def __init__(self, status_code: int, url: str = ""):
        super().__init__(f"HTTP error! status: {status_code}", url)
        self.status_code = status_code


class AccessError(FetchError):
    """The sheet is not publicly readable (sign-in page instead of CSV)."""

    kind = "access"

    def __init__(self, url: str = ""):
        super().__init__(ACCESS_REMEDIATION, url)


class NetworkError(FetchError):
    """The request never produced a usable response (DNS, refused, timed out, redirect loop)."""

    kind = "network"


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def looks_like_html(body: str, content_type: str = "") -> bool:
    """Return True if a response body is an HTML page rather than CSV."""
    if "text/html" in content_type.lower():
        return True
    return body[:512].lstrip().lower().startswith(HTML_PREFIXES)


@mlflow.trace(name="fetch_csv", span_type=SpanType.RETRIEVER)
async def fetch_csv(url: str) -> list[list[str]]:
    """GET a CSV export and parse it into rows of cells.

    A millisecond timestamp query parameter defeats intermediary caches.
    One attempt per call; the caller decides when to fetch again.

    Raises:
        HttpError: non-2xx status.
        AccessError: the body is an HTML sign-in page.
        NetworkError: the request failed before a usable response arrived.
    """
    if not url:
        raise FetchError("No CSV URL configured", url)

    params = {"t": str(int(time.time() * 1000))}
    started = time.monotonic()
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
            resp = await client.get(url, params=params, headers=NO_STORE_HEADERS)
    except httpx.RequestError as e:
        logger.error("Network failure fetching %s: %s", url, e)
        raise NetworkError(f"Network error: {e}", url) from e

    if not resp.is_success:
        logger.error("CSV export returned HTTP %d: %s", resp.status_code, url)
        raise HttpError(resp.status_code, url)

    body = resp.text
    if looks_like_html(body, resp.headers.get("content-type", "")):
        logger.error("CSV export returned HTML (sheet not public): %s", url)
        raise AccessError(url)

    rows = parse_csv(body)
    logger.info(
        "Fetched %d CSV rows from %s",
        len(rows),
        url,
        extra={"endpoint": url, "rows": len(rows),
               "duration_ms": round((time.monotonic() - started) * 1000)},
    )
    return rows


async def fetch_admin_rows(url: str | None = None) -> MappedRows:
    """Fetch and map the administrative hierarchy sheet."""
    rows = await fetch_csv(url if url is not None else settings.admin_csv_url)
    return map_admin_rows(rows)


async def fetch_submission_rows(url: str | None = None) -> MappedRows:
    """Fetch and map the submission log sheet."""
    rows = await fetch_csv(url if url is not None else settings.logs_csv_url)
    return map_submission_rows(rows)
