"""Tests for the report submit adapter."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from fieldreport.core.types import ReportDraft, UrgencyLevel
from fieldreport.retrieval.submit import FAILURE_MESSAGE, SUCCESS_MESSAGE, submit_report

SCRIPT_URL = "https://script.google.com/macros/s/test/exec"


def _draft() -> ReportDraft:
    return ReportDraft(
        region="R1",
        province="P1",
        commune="C1",
        douar="D1",
        urgency=UrgencyLevel.CRITICAL,
        damage="بيوت منهارة",
        needs="خيام",
        phone="0612345678",
        latitude="34.020882",
        longitude="-6.841650",
        map_link="https://www.google.com/maps?q=34.020882,-6.841650",
    )


def _client(status_code: int = 200, exc=None) -> AsyncMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.is_success = 200 <= status_code < 300
    client = AsyncMock()
    if exc is not None:
        client.post.side_effect = exc
    else:
        client.post.return_value = resp
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


class TestSubmitReport:
    async def test_success_posts_json_payload(self):
        client = _client()
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient", return_value=client):
            result = await submit_report(_draft(), SCRIPT_URL)

        assert result.success
        assert result.message == SUCCESS_MESSAGE
        assert not result.acknowledged

        args, kwargs = client.post.call_args
        assert args[0] == SCRIPT_URL
        assert kwargs["headers"]["Content-Type"] == "application/json"
        payload = json.loads(kwargs["content"].decode("utf-8"))
        assert payload["nom_douar"] == "D1"
        assert payload["niveau_urgence"] == "CRITICAL"
        assert payload["nature_dommages"] == "بيوت منهارة"
        assert payload["lien_maps"].endswith("34.020882,-6.841650")

    async def test_status_not_inspected_by_default(self):
        """The write endpoint's reply is opaque; an error status still counts as sent."""
        client = _client(status_code=500)
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient", return_value=client):
            result = await submit_report(_draft(), SCRIPT_URL)
        assert result.success
        assert result.status_code is None

    async def test_transport_failure(self):
        client = _client(exc=httpx.ConnectError("DNS failure"))
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient", return_value=client):
            result = await submit_report(_draft(), SCRIPT_URL)
        assert not result.success
        assert result.message == FAILURE_MESSAGE

    async def test_redirect_loop_reported_as_failure(self):
        client = _client(exc=httpx.TooManyRedirects("Exceeded maximum allowed redirects."))
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient", return_value=client):
            result = await submit_report(_draft(), SCRIPT_URL)
        assert not result.success
        assert result.message == FAILURE_MESSAGE

    async def test_undecodable_response_reported_as_failure(self):
        client = _client(exc=httpx.DecodingError("invalid gzip stream"))
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient", return_value=client):
            result = await submit_report(_draft(), SCRIPT_URL)
        assert not result.success

    async def test_missing_url_fails_without_request(self):
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient") as mock_cls:
            result = await submit_report(_draft(), "")
        assert not result.success
        mock_cls.assert_not_called()

    async def test_read_response_rejected(self):
        client = _client(status_code=403)
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient", return_value=client):
            result = await submit_report(_draft(), SCRIPT_URL, read_response=True)
        assert not result.success
        assert result.acknowledged
        assert result.status_code == 403

    async def test_read_response_accepted(self):
        client = _client(status_code=200)
        with patch("fieldreport.retrieval.submit.httpx.AsyncClient", return_value=client):
            result = await submit_report(_draft(), SCRIPT_URL, read_response=True)
        assert result.success
        assert result.acknowledged
