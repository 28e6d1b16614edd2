"""Application state shared by the form, dashboard and map views.

One AppState per process holds the last fetched administrative rows and
submission log, plus an independent loading flag for each network
operation. Views never cache derived data; options, rankings and map
points are recomputed from the current collections on every call.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from fieldreport.core.types import (
    AdministrativeRow,
    HierarchyOptions,
    MapPoint,
    ReportDraft,
    RowWarning,
    Selection,
    SubmissionRow,
    SubmitResult,
)
from fieldreport.pipeline.draft import reset_after_submit, validate_draft
from fieldreport.pipeline.hierarchy import derive_options
from fieldreport.pipeline.mapping import map_points
from fieldreport.pipeline.ranking import SearchMode, search_logs
from fieldreport.retrieval.sheets import FetchError, fetch_admin_rows, fetch_submission_rows
from fieldreport.retrieval.submit import submit_report

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    admin_csv_url: str | None = None
    logs_csv_url: str | None = None
    submit_url: str | None = None
    region_allow_list: set[str] | None = None

    admin_rows: list[AdministrativeRow] = field(default_factory=list)
    logs: list[SubmissionRow] = field(default_factory=list)
    admin_warnings: list[RowWarning] = field(default_factory=list)
    logs_warnings: list[RowWarning] = field(default_factory=list)

    admin_loading: bool = False
    logs_loading: bool = False
    submitting: bool = False

    admin_error: str | None = None
    logs_error: str | None = None
    admin_error_kind: str | None = None
    logs_error_kind: str | None = None

    async def load_admin_data(self) -> list[AdministrativeRow]:
        """Replace the administrative rows; a failed fetch leaves an empty set."""
        self.admin_loading = True
        try:
            mapped = await fetch_admin_rows(self.admin_csv_url)
        except FetchError as e:
            logger.warning("Administrative data unavailable: %s", e)
            self.admin_rows, self.admin_warnings = [], []
            self.admin_error, self.admin_error_kind = str(e), e.kind
        else:
            self.admin_rows, self.admin_warnings = mapped.records, mapped.warnings
            self.admin_error = self.admin_error_kind = None
            logger.info("Loaded %d administrative rows", len(self.admin_rows),
                        extra={"rows": len(self.admin_rows), "warnings": len(self.admin_warnings)})
        finally:
            self.admin_loading = False
        return self.admin_rows

    async def refresh_logs(self) -> list[SubmissionRow]:
        """Replace the submission log; a failed fetch leaves an empty list."""
        self.logs_loading = True
        try:
            mapped = await fetch_submission_rows(self.logs_csv_url)
        except FetchError as e:
            logger.warning("Submission log unavailable: %s", e)
            self.logs, self.logs_warnings = [], []
            self.logs_error, self.logs_error_kind = str(e), e.kind
        else:
            self.logs, self.logs_warnings = mapped.records, mapped.warnings
            self.logs_error = self.logs_error_kind = None
            logger.info("Loaded %d submissions", len(self.logs),
                        extra={"rows": len(self.logs), "warnings": len(self.logs_warnings)})
        finally:
            self.logs_loading = False
        return self.logs

    async def load_all(self) -> None:
        """Initial load; the two sheets have no ordering dependency."""
        await asyncio.gather(self.load_admin_data(), self.refresh_logs())

    def options(self, selection: Selection | None = None) -> HierarchyOptions:
        return derive_options(self.admin_rows, selection, self.region_allow_list)

    def search(
        self,
        filters: dict[str, str] | None = None,
        query: str = "",
        mode: SearchMode = SearchMode.RANK,
    ) -> list[SubmissionRow]:
        return search_logs(self.logs, filters, query, mode)

    def points(self) -> list[MapPoint]:
        return map_points(self.logs)

    async def submit(self, draft: ReportDraft) -> tuple[SubmitResult, ReportDraft]:
        """Validate and send a draft.

        Returns the submission result and the draft the form should show
        next: cleared after success, untouched after failure.

        Raises:
            DraftValidationError: before any network call.
        """
        validate_draft(draft)
        self.submitting = True
        try:
            result = await submit_report(draft, self.submit_url)
        finally:
            self.submitting = False
        if result.success:
            return result, reset_after_submit(draft)
        return result, draft
