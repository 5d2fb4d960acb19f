import logging
from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import LogTopicError, MismatchedABI
from core.exceptions import MalformedRecordException
from scanner.schemas import TransferRecord

TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"

TRANSFER_EVENT_ABI = {
    "anonymous": False,
    "inputs": [
        {"indexed": True, "name": "from", "type": "address"},
        {"indexed": True, "name": "to", "type": "address"},
        {"indexed": False, "name": "value", "type": "uint256"},
    ],
    "name": "Transfer",
    "type": "event",
}

REQUIRED_LOG_KEYS = ("topics", "data", "transactionHash", "blockNumber")


class EventCodec:
    """
    Codec for the ERC-20 ``Transfer`` event.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._event = Web3().eth.contract(abi=[TRANSFER_EVENT_ABI]).events.Transfer()
        self._signature = Web3.to_hex(Web3.keccak(text=TRANSFER_EVENT_SIGNATURE))

    @property
    def signature(self) -> str:
        """
        Topic0 of the Transfer event, ``0x``-prefixed.

        Returns
        -------
        str
            keccak256 of the canonical event signature
        """
        return self._signature

    def decode(self, log: dict, contract: str) -> TransferRecord | None:
        """
        Decode raw log into a transfer record.

        Logs of a different shape (another topic0, an indexed token id,
        undecodable data) are not errors and yield None.

        Parameters
        ----------
        log : dict
            Raw log as returned by ``eth_getLogs``
        contract : str
            Watched contract the log was queried for

        Returns
        -------
        TransferRecord | None
            Decoded record, or None when the log does not match

        Raises
        ------
        MalformedRecordException
            If the log lacks fields every log carries or they cannot be read
        """
        missing = [key for key in REQUIRED_LOG_KEYS if key not in log]
        if missing:
            raise MalformedRecordException(f"Log is missing fields: {', '.join(missing)}")

        try:
            decoded = self._event.process_log(log)
            block_number = int(log["blockNumber"])
        except (MismatchedABI, LogTopicError, DecodingError) as e:
            self.logger.debug(f"Skipping non-Transfer log in {self._to_hex(log['transactionHash'])}: {e}")
            return None
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedRecordException(f"Log could not be read: {e}") from e

        return TransferRecord(
            contract=contract,
            tx_hash=self._to_hex(log["transactionHash"]),
            block_number=block_number,
            from_address=decoded["args"]["from"],
            to_address=decoded["args"]["to"],
            value=str(decoded["args"]["value"])
        )

    @staticmethod
    def _to_hex(value: bytes | str) -> str:
        if isinstance(value, str):
            return value
        return Web3.to_hex(value)
