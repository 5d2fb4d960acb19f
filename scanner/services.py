import logging
from datetime import datetime, timezone
from typing import Callable, Iterable
from core.environment.config import Settings
from core.exceptions import BaseCustomException, ConnectivityException
from scanner.codec import EventCodec
from scanner.endpoint import NetworkEndpoint
from scanner.entities import AggregatedReport, ChainScanOutcome, ContractScanOutcome, NetworkConfig, ScanWindow
from scanner.schemas import NetworkScanResult, Report
from scanner.storage import ReportWriter

EndpointFactory = Callable[[str, str], NetworkEndpoint]


class ChainScanner:
    """
    Scans one network for Transfer events of its watched contracts.

    Parameters
    ----------
    settings : Settings
        Application settings (RPC URLs, watch-lists, window size)
    codec : EventCodec
        Transfer event codec
    endpoint_factory : EndpointFactory
        Builds an endpoint from ``(network name, rpc url)``
    logger : logging.Logger
        Logger instance
    """

    def __init__(
        self,
        settings: Settings,
        codec: EventCodec,
        endpoint_factory: EndpointFactory,
        logger: logging.Logger
    ):
        self.settings = settings
        self.codec = codec
        self.endpoint_factory = endpoint_factory
        self.logger = logger

    async def scan(self, network: NetworkConfig) -> ChainScanOutcome:
        """
        Scan a single network.

        A network without RPC URL is skipped, a network whose height
        query fails is reported as failed. Failures of one contract only
        drop that contract's events.

        Parameters
        ----------
        network : NetworkConfig
            Network to scan

        Returns
        -------
        ChainScanOutcome
            Explicit scanned / skipped / failed outcome
        """
        rpc_url = self.settings.get_rpc_url(network.rpc_env)
        if rpc_url is None:
            reason = f"no RPC configured ({network.rpc_env})"
            self.logger.info(f"[{network.name}] {reason} - skipping")
            return ChainScanOutcome(chain=network.name, status="skipped", reason=reason)

        contracts = self.settings.get_watch_list(network.contracts_env)
        endpoint = self.endpoint_factory(network.name, rpc_url)

        try:
            try:
                latest = await endpoint.current_height()
            except ConnectivityException as e:
                self.logger.error(f"[{network.name}] {e.message}")
                return ChainScanOutcome(chain=network.name, status="failed", reason=e.message)

            window = ScanWindow.behind(latest, self.settings.scan_block_window)

            contract_outcomes = []
            for contract in contracts:
                contract_outcomes.append(
                    await self._scan_contract(endpoint, network, contract, window)
                )
        finally:
            await endpoint.close()

        result = NetworkScanResult(
            chain=network.name,
            latest=window.to_block,
            from_block=window.from_block,
            events=[event for outcome in contract_outcomes for event in outcome.events],
            contracts_count=len(contracts)
        )

        self.logger.info(
            f"[{result.chain}] latest={result.latest} fromBlock={result.from_block} "
            f"contracts={result.contracts_count} logsFound={len(result.events)}"
        )

        return ChainScanOutcome(
            chain=network.name,
            status="scanned",
            result=result,
            contracts=contract_outcomes
        )

    async def _scan_contract(
        self,
        endpoint: NetworkEndpoint,
        network: NetworkConfig,
        contract: str,
        window: ScanWindow
    ) -> ContractScanOutcome:
        """
        Query and decode logs of one contract, isolating its failures.

        Parameters
        ----------
        endpoint : NetworkEndpoint
            Network endpoint
        network : NetworkConfig
            Network being scanned
        contract : str
            Contract address
        window : ScanWindow
            Block range

        Returns
        -------
        ContractScanOutcome
            Decoded events, or the error that discarded them
        """
        try:
            logs = await endpoint.query_records(
                contract, window.from_block, window.to_block, self.codec.signature
            )
            events = []
            for log in logs:
                record = self.codec.decode(log, contract)
                if record is not None:
                    events.append(record)
        except BaseCustomException as e:
            self.logger.error(f"[{network.name}] error scanning {contract}: {e.message}")
            return ContractScanOutcome(contract=contract, error=e.message)

        return ContractScanOutcome(contract=contract, events=events)


class ReportAggregator:
    """
    Runs the scanner over every network and persists one report.

    Parameters
    ----------
    scanner : ChainScanner
        Per-network scanner
    writer : ReportWriter
        Report persistence
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, scanner: ChainScanner, writer: ReportWriter, logger: logging.Logger):
        self.scanner = scanner
        self.writer = writer
        self.logger = logger

    async def scan_all(self, networks: Iterable[NetworkConfig]) -> list[ChainScanOutcome]:
        """
        Scan networks one after another, in the given order.

        Parameters
        ----------
        networks : Iterable[NetworkConfig]
            Configured networks

        Returns
        -------
        list[ChainScanOutcome]
            One outcome per network, same order
        """
        outcomes = []
        for network in networks:
            outcomes.append(await self.scanner.scan(network))
        return outcomes

    async def run(self, networks: Iterable[NetworkConfig]) -> AggregatedReport:
        """
        Scan all networks, build the report and persist it.

        Parameters
        ----------
        networks : Iterable[NetworkConfig]
            Configured networks

        Returns
        -------
        AggregatedReport
            The persisted report, its file and the per-network outcomes

        Raises
        ------
        PersistenceException
            If the report cannot be written
        """
        outcomes = await self.scan_all(networks)

        report = Report(
            generated_at=datetime.now(timezone.utc),
            results=[outcome.result for outcome in outcomes if outcome.status == "scanned"]
        )

        skipped = [outcome.chain for outcome in outcomes if outcome.status == "skipped"]
        failed = [outcome.chain for outcome in outcomes if outcome.status == "failed"]
        if skipped:
            self.logger.info(f"Networks skipped (not configured): {', '.join(skipped)}")
        if failed:
            self.logger.warning(f"Networks failed (unreachable): {', '.join(failed)}")

        report_path = self.writer.write(report)
        return AggregatedReport(report=report, report_path=report_path, outcomes=outcomes)
