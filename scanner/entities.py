from pathlib import Path
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field
from scanner.schemas import NetworkScanResult, Report, TransferRecord


class NetworkConfig(BaseModel):
    """
    Static description of a scanned network.

    Attributes
    ----------
    name : str
        Network name used in the report
    rpc_env : str
        Variable holding the network RPC URL
    contracts_env : str
        Variable holding the network watch-list
    """
    name: str
    rpc_env: str
    contracts_env: str

    model_config = ConfigDict(frozen=True)


NETWORKS: tuple[NetworkConfig, ...] = (
    NetworkConfig(name="base", rpc_env="BASE_RPC", contracts_env="REWARD_CONTRACTS_BASE"),
    NetworkConfig(name="optimism", rpc_env="OP_RPC", contracts_env="REWARD_CONTRACTS_OPTIMISM"),
    NetworkConfig(name="arbitrum", rpc_env="ARBITRUM_RPC", contracts_env="REWARD_CONTRACTS_ARBITRUM"),
)


class ScanWindow(BaseModel):
    """
    Inclusive block range scanned on one network.

    Attributes
    ----------
    from_block : int
        First block, never below 1
    to_block : int
        Last block, the observed height
    """
    from_block: int
    to_block: int

    model_config = ConfigDict(frozen=True)

    @classmethod
    def behind(cls, latest: int, window: int) -> "ScanWindow":
        """
        Build window covering ``window`` blocks behind ``latest``.

        Parameters
        ----------
        latest : int
            Current chain height
        window : int
            Number of blocks to look back

        Returns
        -------
        ScanWindow
            Window ``[max(1, latest - window), latest]``
        """
        return cls(from_block=max(1, latest - window), to_block=latest)


class ContractScanOutcome(BaseModel):
    """Per-contract diagnostic of a network scan."""
    contract: str
    events: list[TransferRecord] = Field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class ChainScanOutcome(BaseModel):
    """
    Outcome of scanning one network.

    Attributes
    ----------
    chain : str
        Network name
    status : Literal["scanned", "skipped", "failed"]
        ``skipped`` when no RPC URL is configured, ``failed`` when the
        height query failed
    result : NetworkScanResult | None
        Present only for scanned networks
    reason : str | None
        Why the network was skipped or failed
    contracts : list[ContractScanOutcome]
        Per-contract diagnostics, in watch-list order
    """
    chain: str
    status: Literal["scanned", "skipped", "failed"]
    result: NetworkScanResult | None = None
    reason: str | None = None
    contracts: list[ContractScanOutcome] = Field(default_factory=list)


class DeliveryOutcome(BaseModel):
    """
    Outcome of the webhook delivery step.

    Attributes
    ----------
    attempted : bool
        False when no webhook is configured
    delivered : bool
        True when the POST succeeded or nothing had to be sent
    error : str | None
        Failure description
    """
    attempted: bool
    delivered: bool
    error: str | None = None


class AggregatedReport(BaseModel):
    """
    Persisted report together with the per-network outcomes behind it.

    Attributes
    ----------
    report : Report
        The persisted report
    report_path : Path
        File the report was written to
    outcomes : list[ChainScanOutcome]
        One outcome per configured network, in configuration order
    """
    report: Report
    report_path: Path
    outcomes: list[ChainScanOutcome]


class RunSummary(BaseModel):
    """Everything one scan run produced."""
    report: Report
    report_path: Path
    outcomes: list[ChainScanOutcome]
    delivery: DeliveryOutcome
