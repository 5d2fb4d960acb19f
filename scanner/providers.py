from dishka import Provider, Scope, provide, FromComponent
from typing import Annotated
import aiohttp
import logging
from core.environment.config import Settings
from scanner.codec import EventCodec
from scanner.endpoint import NetworkEndpointFactory
from scanner.services import ChainScanner, ReportAggregator
from scanner.storage import ReportWriter
from scanner.usecases import RunScanUseCase
from scanner.webhook import WebhookDelivery


class ScannerProvider(Provider):
    """
    Provider for scan pipeline dependencies.
    """

    component = "scanner"

    @provide(scope=Scope.APP)
    def get_event_codec(
        self,
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> EventCodec:
        """
        Provide Transfer event codec.

        Parameters
        ----------
        logger : logging.Logger
            Logger instance

        Returns
        -------
        EventCodec
            Event codec instance
        """
        return EventCodec(logger=logger)

    @provide(scope=Scope.APP)
    def get_endpoint_factory(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> NetworkEndpointFactory:
        """
        Provide factory of per-network RPC endpoints.

        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        NetworkEndpointFactory
            Endpoint factory using the configured RPC timeout
        """
        return NetworkEndpointFactory(timeout=settings.rpc_timeout, logger=logger)

    @provide(scope=Scope.APP)
    def get_chain_scanner(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        codec: Annotated[EventCodec, FromComponent("scanner")],
        endpoint_factory: Annotated[NetworkEndpointFactory, FromComponent("scanner")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ChainScanner:
        """
        Provide chain scanner.

        Parameters
        ----------
        settings : Settings
            Application settings
        codec : EventCodec
            Event codec instance
        endpoint_factory : NetworkEndpointFactory
            Endpoint factory
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ChainScanner
            Chain scanner instance
        """
        return ChainScanner(
            settings=settings,
            codec=codec,
            endpoint_factory=endpoint_factory,
            logger=logger
        )

    @provide(scope=Scope.APP)
    def get_report_writer(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ReportWriter:
        """
        Provide report writer.

        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ReportWriter
            Writer targeting the configured report directory
        """
        return ReportWriter(report_dir=settings.report_dir, logger=logger)

    @provide(scope=Scope.APP)
    def get_report_aggregator(
        self,
        scanner: Annotated[ChainScanner, FromComponent("scanner")],
        writer: Annotated[ReportWriter, FromComponent("scanner")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ReportAggregator:
        """
        Provide report aggregator.

        Parameters
        ----------
        scanner : ChainScanner
            Chain scanner instance
        writer : ReportWriter
            Report writer instance
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ReportAggregator
            Report aggregator instance
        """
        return ReportAggregator(scanner=scanner, writer=writer, logger=logger)

    @provide(scope=Scope.APP)
    def get_webhook_delivery(
        self,
        session: Annotated[aiohttp.ClientSession, FromComponent("http")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> WebhookDelivery:
        """
        Provide webhook delivery.

        Parameters
        ----------
        session : aiohttp.ClientSession
            Shared HTTP session
        logger : logging.Logger
            Logger instance

        Returns
        -------
        WebhookDelivery
            Webhook delivery instance
        """
        return WebhookDelivery(session=session, logger=logger)

    @provide(scope=Scope.APP)
    def get_run_scan_use_case(
        self,
        aggregator: Annotated[ReportAggregator, FromComponent("scanner")],
        delivery: Annotated[WebhookDelivery, FromComponent("scanner")],
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> RunScanUseCase:
        """
        Provide run scan use case.

        Parameters
        ----------
        aggregator : ReportAggregator
            Report aggregator
        delivery : WebhookDelivery
            Webhook delivery
        settings : Settings
            Application settings

        Returns
        -------
        RunScanUseCase
            Run scan use case
        """
        return RunScanUseCase(
            aggregator=aggregator,
            delivery=delivery,
            settings=settings
        )
