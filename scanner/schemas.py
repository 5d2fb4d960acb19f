from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_serializer


class TransferRecord(BaseModel):
    """
    Decoded Transfer event as written to the report.

    Attributes
    ----------
    contract : str
        Watched contract address the log was queried for
    tx_hash : str
        Transaction hash
    block_number : int
        Block number where event occurred
    from_address : str
        Sender address
    to_address : str
        Recipient address
    value : str
        Transferred amount as a decimal string
    """
    contract: str
    tx_hash: str = Field(alias="txHash")
    block_number: int = Field(alias="blockNumber")
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    value: str

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class NetworkScanResult(BaseModel):
    """
    Result of scanning one network.

    Attributes
    ----------
    chain : str
        Network name
    latest : int
        Height observed at scan time (window upper bound)
    from_block : int
        Window lower bound
    events : list[TransferRecord]
        Decoded events, in watch-list order
    contracts_count : int
        Size of the watch-list, including contracts that failed
    """
    chain: str
    latest: int
    from_block: int = Field(alias="fromBlock")
    events: list[TransferRecord]
    contracts_count: int = Field(alias="contractsCount")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Report(BaseModel):
    """
    Aggregated report of one run.

    Attributes
    ----------
    generated_at : datetime
        UTC instant the report was assembled
    results : list[NetworkScanResult]
        Scanned networks in configuration order
    """
    generated_at: datetime = Field(alias="generatedAt")
    results: list[NetworkScanResult]

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_serializer("generated_at")
    def serialize_generated_at(self, value: datetime) -> str:
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def to_json(self) -> str:
        """
        Serialize report to the persisted and delivered JSON form.

        Returns
        -------
        str
            Pretty-printed JSON document
        """
        return self.model_dump_json(by_alias=True, indent=2)
