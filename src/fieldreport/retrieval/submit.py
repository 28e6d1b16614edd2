"""Report submission to the Google Apps Script web app.

The browser form posts in ``no-cors`` mode, so the script's reply is
opaque and a request that leaves the client is taken as stored. The
same contract is kept here: only a transport failure is a failure.
``read_response=True`` is for transports that can see the real status;
callers get the richer SubmitResult without changing how they call it.
"""

import json
import logging

import httpx
import mlflow
from mlflow.entities import SpanType

from fieldreport.config import settings
from fieldreport.core.types import ReportDraft, SubmitResult

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "تم إرسال البيانات بنجاح"
FAILURE_MESSAGE = "حدث خطأ أثناء إرسال البيانات. يرجى المحاولة مرة أخرى."


class TransportError(Exception):
    """The report could not be delivered to the write endpoint."""


async def _post(url: str, payload: dict[str, str]) -> httpx.Response:
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
            return await client.post(
                url,
                content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                headers={"Content-Type": "application/json", "Cache-Control": "no-cache"},
            )
    except httpx.RequestError as e:
        raise TransportError(str(e)) from e


@mlflow.trace(name="submit_report", span_type=SpanType.TOOL)
async def submit_report(
    draft: ReportDraft,
    url: str | None = None,
    read_response: bool = False,
) -> SubmitResult:
    """Serialize a draft and POST it to the write endpoint.

    Never raises for delivery problems; they come back as
    ``SubmitResult(success=False)`` with the user-facing retry message.
    """
    target = url if url is not None else settings.submit_url
    try:
        if not target:
            raise TransportError("No submit URL configured")
        resp = await _post(target, draft.to_payload())
    except TransportError:
        logger.exception("Submission error")
        return SubmitResult(success=False, message=FAILURE_MESSAGE)

    if read_response:
        if not resp.is_success:
            logger.error("Write endpoint rejected report: HTTP %d", resp.status_code)
            return SubmitResult(
                success=False,
                message=FAILURE_MESSAGE,
                acknowledged=True,
                status_code=resp.status_code,
            )
        logger.info("Report stored for douar %s", draft.douar)
        return SubmitResult(
            success=True,
            message=SUCCESS_MESSAGE,
            acknowledged=True,
            status_code=resp.status_code,
        )

    logger.info("Report sent for douar %s (response not inspected)", draft.douar)
    return SubmitResult(success=True, message=SUCCESS_MESSAGE)
