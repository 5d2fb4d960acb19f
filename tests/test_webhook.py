import json
from datetime import datetime, timezone

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from scanner.schemas import NetworkScanResult, Report
from scanner.webhook import WebhookDelivery


@pytest_asyncio.fixture
async def session():
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=5)) as client_session:
        yield client_session


@pytest_asyncio.fixture
async def webhook_server():
    """
    Local webhook recording every request it receives.

    Yields
    ------
    tuple[TestServer, list]
        Running server and received requests as ``(content type, body)``
    """
    received = []

    async def accept(request: web.Request) -> web.Response:
        received.append((request.content_type, await request.text()))
        return web.Response(status=204)

    async def reject(request: web.Request) -> web.Response:
        received.append((request.content_type, await request.text()))
        return web.Response(status=500, text="boom")

    app = web.Application()
    app.router.add_post("/hook", accept)
    app.router.add_post("/broken", reject)

    async with TestServer(app) as server:
        yield server, received


@pytest.fixture
def report() -> Report:
    return Report(
        generated_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        results=[NetworkScanResult(chain="base", latest=10, from_block=1, events=[], contracts_count=0)]
    )


class TestWebhookDelivery:
    """
    Unit tests for best-effort webhook delivery.
    """

    @pytest.mark.asyncio
    async def test_no_url_is_noop(self, session, logger, report):
        delivery = WebhookDelivery(session=session, logger=logger)

        outcome = await delivery.deliver(report, None)

        assert not outcome.attempted
        assert outcome.delivered

    @pytest.mark.asyncio
    async def test_posts_report_json(self, session, logger, report, webhook_server):
        """
        Test the full report is posted once as JSON.
        """
        server, received = webhook_server
        delivery = WebhookDelivery(session=session, logger=logger)

        outcome = await delivery.deliver(report, str(server.make_url("/hook")))

        assert outcome.attempted and outcome.delivered
        assert len(received) == 1
        content_type, body = received[0]
        assert content_type == "application/json"
        assert json.loads(body) == json.loads(report.to_json())

    @pytest.mark.asyncio
    async def test_error_status_is_reported_not_raised(self, session, logger, report, webhook_server):
        server, received = webhook_server
        delivery = WebhookDelivery(session=session, logger=logger)

        outcome = await delivery.deliver(report, str(server.make_url("/broken")))

        assert outcome.attempted
        assert not outcome.delivered
        assert "500" in outcome.error
        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unreachable_webhook_is_reported_not_raised(self, session, logger, report):
        """
        Test connection failures are captured in the outcome.
        """
        delivery = WebhookDelivery(session=session, logger=logger)

        outcome = await delivery.deliver(report, "http://127.0.0.1:1/hook")

        assert outcome.attempted
        assert not outcome.delivered
        assert outcome.error
