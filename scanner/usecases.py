from typing import Iterable
from core.environment.config import Settings
from scanner.entities import NetworkConfig, RunSummary
from scanner.services import ReportAggregator
from scanner.webhook import WebhookDelivery


class RunScanUseCase:
    """
    Use case for one scan run: aggregate, persist, deliver.

    Parameters
    ----------
    aggregator : ReportAggregator
        Report aggregator
    delivery : WebhookDelivery
        Webhook delivery
    settings : Settings
        Application settings
    """

    def __init__(
        self,
        aggregator: ReportAggregator,
        delivery: WebhookDelivery,
        settings: Settings
    ):
        self.aggregator = aggregator
        self.delivery = delivery
        self.settings = settings

    async def __call__(self, networks: Iterable[NetworkConfig]) -> RunSummary:
        """
        Execute use case.

        Parameters
        ----------
        networks : Iterable[NetworkConfig]
            Networks to scan, in report order

        Returns
        -------
        RunSummary
            Persisted report, its file, per-network outcomes and delivery outcome
        """
        aggregated = await self.aggregator.run(networks)
        delivery = await self.delivery.deliver(aggregated.report, self.settings.scan_webhook_url)
        return RunSummary(
            report=aggregated.report,
            report_path=aggregated.report_path,
            outcomes=aggregated.outcomes,
            delivery=delivery
        )
