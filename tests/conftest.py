import logging

import pytest
from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3

from core.environment.config import Settings
from core.exceptions import ConnectivityException


CONFIG_ENV_VARS = (
    "BASE_RPC", "OP_RPC", "ARBITRUM_RPC",
    "REWARD_CONTRACTS_BASE", "REWARD_CONTRACTS_OPTIMISM", "REWARD_CONTRACTS_ARBITRUM",
    "SCAN_BLOCK_WINDOW", "REPORT_DIR", "SCAN_WEBHOOK_URL",
    "RPC_TIMEOUT", "WEBHOOK_TIMEOUT", "LOG_LEVEL",
)

TRANSFER_TOPIC = HexBytes(Web3.keccak(text="Transfer(address,address,uint256)"))
APPROVAL_TOPIC = HexBytes(Web3.keccak(text="Approval(address,address,uint256)"))

CONTRACT_A = "0x" + "aa" * 20
CONTRACT_B = "0x" + "bb" * 20
ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's shell configuration out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("chain_scanner.tests")


@pytest.fixture
def make_settings(tmp_path):
    """
    Factory for settings isolated from environment files.

    Parameters
    ----------
    tmp_path : Path
        Temporary directory used as default report directory

    Returns
    -------
    Callable[..., Settings]
        Settings factory accepting field overrides
    """
    def factory(**overrides) -> Settings:
        overrides.setdefault("report_dir", str(tmp_path / "reports"))
        return Settings(_env_file=None, **overrides)
    return factory


def address_topic(address: str) -> HexBytes:
    return HexBytes(b"\x00" * 12 + bytes.fromhex(address[2:]))


def make_log(
    contract: str,
    topics: list,
    data: bytes,
    block_number: int = 900,
    log_index: int = 0,
    tx_byte: int = 1
) -> dict:
    return {
        "address": Web3.to_checksum_address(contract),
        "topics": topics,
        "data": HexBytes(data),
        "blockNumber": block_number,
        "blockHash": HexBytes(b"\x0b" * 32),
        "transactionHash": HexBytes(bytes([tx_byte]) * 32),
        "transactionIndex": 0,
        "logIndex": log_index,
        "removed": False,
    }


def make_transfer_log(
    contract: str,
    sender: str,
    recipient: str,
    value: int,
    block_number: int = 900,
    log_index: int = 0,
    tx_byte: int = 1
) -> dict:
    """
    Build raw ERC-20 Transfer log as returned by eth_getLogs.

    Returns
    -------
    dict
        Log entry with encoded topics and data
    """
    return make_log(
        contract,
        [TRANSFER_TOPIC, address_topic(sender), address_topic(recipient)],
        encode(["uint256"], [value]),
        block_number=block_number,
        log_index=log_index,
        tx_byte=tx_byte
    )


class FakeEndpoint:
    """In-memory network endpoint."""

    def __init__(
        self,
        height: int = 1000,
        logs: dict[str, list] | None = None,
        failing: tuple[str, ...] = (),
        height_error: Exception | None = None
    ):
        self.height = height
        self.logs = logs or {}
        self.failing = failing
        self.height_error = height_error
        self.queries = []
        self.closed = False

    async def current_height(self) -> int:
        if self.height_error is not None:
            raise self.height_error
        return self.height

    async def query_records(self, address, from_block, to_block, signature):
        self.queries.append((address, from_block, to_block, signature))
        if address in self.failing:
            raise ConnectivityException(f"log query for {address} failed")
        return self.logs.get(address, [])

    async def close(self) -> None:
        self.closed = True


class FakeEndpointFactory:
    """Hands out prepared fake endpoints by network name."""

    def __init__(self, endpoints: dict[str, FakeEndpoint]):
        self.endpoints = endpoints
        self.calls = []

    def __call__(self, network: str, rpc_url: str) -> FakeEndpoint:
        self.calls.append((network, rpc_url))
        return self.endpoints[network]
