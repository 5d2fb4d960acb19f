import asyncio
import logging
import aiohttp
from core.exceptions import DeliveryException
from scanner.entities import DeliveryOutcome
from scanner.schemas import Report


class WebhookDelivery:
    """
    Best-effort delivery of a report to a webhook.

    Parameters
    ----------
    session : aiohttp.ClientSession
        HTTP client session
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, session: aiohttp.ClientSession, logger: logging.Logger):
        self.session = session
        self.logger = logger

    async def deliver(self, report: Report, url: str | None) -> DeliveryOutcome:
        """
        POST the report once; failures are logged, never raised.

        Parameters
        ----------
        report : Report
            Persisted report
        url : str | None
            Webhook URL; nothing is sent when empty

        Returns
        -------
        DeliveryOutcome
            Whether delivery was attempted and succeeded
        """
        if not url:
            return DeliveryOutcome(attempted=False, delivered=True)

        try:
            await self._post(url, report.to_json())
        except DeliveryException as e:
            self.logger.error(f"Webhook post failed: {e.message}")
            return DeliveryOutcome(attempted=True, delivered=False, error=e.message)

        self.logger.info("Posted report to webhook")
        return DeliveryOutcome(attempted=True, delivered=True)

    async def _post(self, url: str, body: str) -> None:
        try:
            async with self.session.post(
                url,
                data=body.encode("utf-8"),
                headers={"content-type": "application/json"}
            ) as response:
                if response.status >= 400:
                    raise DeliveryException(f"Webhook responded with HTTP {response.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeliveryException(f"{type(e).__name__}: {e}") from e
