import logging
import aiohttp
from web3 import AsyncWeb3, Web3
from core.exceptions import ConnectivityException, InvalidAddressException


class NetworkEndpoint:
    """
    RPC connection to a single network.

    No retries are performed; every failure surfaces as
    ``ConnectivityException`` to the caller.

    Parameters
    ----------
    web3 : AsyncWeb3
        Web3 client bound to the network RPC URL
    network : str
        Network name
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, web3: AsyncWeb3, network: str, logger: logging.Logger):
        self.web3 = web3
        self.network = network
        self.logger = logger

    async def current_height(self) -> int:
        """
        Get current block number.

        Returns
        -------
        int
            Latest block number

        Raises
        ------
        ConnectivityException
            If the RPC call fails
        """
        try:
            return int(await self.web3.eth.block_number)
        except Exception as e:
            raise ConnectivityException(f"[{self.network}] block number query failed: {e}") from e

    async def query_records(
        self,
        address: str,
        from_block: int,
        to_block: int,
        signature: str
    ) -> list:
        """
        Fetch logs of one contract matching a topic0 inside a block range.

        Parameters
        ----------
        address : str
            Contract address
        from_block : int
            Starting block number (inclusive)
        to_block : int
            Ending block number (inclusive)
        signature : str
            Topic0 to filter on

        Returns
        -------
        list
            Raw log entries in node order

        Raises
        ------
        InvalidAddressException
            If address is not a valid EVM address
        ConnectivityException
            If the RPC call fails
        """
        try:
            checksum_address = Web3.to_checksum_address(address)
        except ValueError as e:
            raise InvalidAddressException(f"Invalid contract address {address!r}") from e

        filter_params = {
            'address': checksum_address,
            'fromBlock': from_block,
            'toBlock': to_block,
            'topics': [signature]
        }

        try:
            logs = await self.web3.eth.get_logs(filter_params)
        except Exception as e:
            raise ConnectivityException(
                f"[{self.network}] log query for {address} ({from_block}-{to_block}) failed: {e}"
            ) from e

        if logs:
            self.logger.debug(f"[{self.network}] {address} {from_block}-{to_block}: found {len(logs)} logs")
        return list(logs)

    async def close(self) -> None:
        """Release the provider HTTP session."""
        try:
            await self.web3.provider.disconnect()
        except Exception as e:
            self.logger.debug(f"[{self.network}] provider disconnect failed: {e}")


class NetworkEndpointFactory:
    """
    Builds a ``NetworkEndpoint`` for a resolved RPC URL.

    Parameters
    ----------
    timeout : float
        Timeout in seconds for a single RPC call
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, timeout: float, logger: logging.Logger):
        self.timeout = timeout
        self.logger = logger

    def __call__(self, network: str, rpc_url: str) -> NetworkEndpoint:
        provider = AsyncWeb3.AsyncHTTPProvider(
            rpc_url,
            request_kwargs={"timeout": aiohttp.ClientTimeout(total=self.timeout)},
            exception_retry_configuration=None
        )
        return NetworkEndpoint(
            web3=AsyncWeb3(provider),
            network=network,
            logger=self.logger
        )
