import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings using Pydantic Settings.

    Read once at startup and frozen afterwards; components receive this
    instance instead of looking at the environment themselves.

    Attributes
    ----------
    base_rpc : str | None
        RPC URL for the base network
    op_rpc : str | None
        RPC URL for the optimism network
    arbitrum_rpc : str | None
        RPC URL for the arbitrum network
    reward_contracts_base : str | None
        Comma-separated contract addresses watched on base
    reward_contracts_optimism : str | None
        Comma-separated contract addresses watched on optimism
    reward_contracts_arbitrum : str | None
        Comma-separated contract addresses watched on arbitrum
    scan_block_window : int
        Number of blocks behind the current height to scan
    report_dir : str
        Directory for persisted report files
    scan_webhook_url : str | None
        Webhook receiving the report (optional)
    rpc_timeout : float
        Timeout in seconds for a single RPC call
    webhook_timeout : float
        Timeout in seconds for the webhook delivery attempt
    log_level : str
        Root logging level
    """

    base_rpc: str | None = None
    op_rpc: str | None = None
    arbitrum_rpc: str | None = None

    reward_contracts_base: str | None = None
    reward_contracts_optimism: str | None = None
    reward_contracts_arbitrum: str | None = None

    scan_block_window: int = Field(default=500, ge=0)
    report_dir: str = "reports"
    scan_webhook_url: str | None = None

    rpc_timeout: float = Field(default=30.0, gt=0)
    webhook_timeout: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True
    )

    def get_rpc_url(self, rpc_env: str) -> str | None:
        """
        Get RPC URL configured under the given variable.

        Parameters
        ----------
        rpc_env : str
            Environment variable name (BASE_RPC, OP_RPC, etc.)

        Returns
        -------
        str | None
            RPC URL, or None when unset or empty
        """
        value = getattr(self, rpc_env.lower(), None)
        if not value or not value.strip():
            return None
        return value.strip()

    def get_watch_list(self, contracts_env: str) -> list[str]:
        """
        Get watched contract addresses configured under the given variable.

        Parameters
        ----------
        contracts_env : str
            Environment variable name (REWARD_CONTRACTS_BASE, etc.)

        Returns
        -------
        list[str]
            Addresses in configured order, blanks and repeats removed
        """
        raw = getattr(self, contracts_env.lower(), None) or ""
        addresses = []
        seen = set()
        for item in raw.split(","):
            address = item.strip()
            if not address or address.lower() in seen:
                continue
            seen.add(address.lower())
            addresses.append(address)
        return addresses
