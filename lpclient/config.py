"""Runtime configuration for the pool client."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_RPC_URL = "http://127.0.0.1:8545"

# Outer bound on one user action, approvals included
DEFAULT_ACTION_TIMEOUT = 300.0

# Bound on a single settlement wait
DEFAULT_RECEIPT_TIMEOUT = 240.0

DEFAULT_REFRESH_TIMEOUT = 30.0

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ClientConfig:
    """Centralized configuration for the pool client.

    Attributes:
        rpc_url: JSON-RPC endpoint of the wallet provider
        deployment_file: Path to the deployment metadata JSON
        action_timeout: Seconds before a busy action is failed as a timeout
        receipt_timeout: Seconds to wait for one transaction receipt
        refresh_timeout: Seconds before a pool refresh is failed
        auto_connect: Connect the wallet once when the service starts
        host: Bind address of the HTTP surface
        port: Port of the HTTP surface
        debug: Verbose logging and reload mode
    """

    rpc_url: str = DEFAULT_RPC_URL
    deployment_file: str | None = None
    action_timeout: float = DEFAULT_ACTION_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    refresh_timeout: float = DEFAULT_REFRESH_TIMEOUT
    auto_connect: bool = True
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False

    def __post_init__(self) -> None:
        for name in ("action_timeout", "receipt_timeout", "refresh_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build configuration from LPCLIENT_* environment variables."""
        return cls(
            rpc_url=os.environ.get("LPCLIENT_RPC_URL", DEFAULT_RPC_URL),
            deployment_file=os.environ.get("LPCLIENT_DEPLOYMENT_FILE"),
            action_timeout=float(
                os.environ.get("LPCLIENT_ACTION_TIMEOUT", DEFAULT_ACTION_TIMEOUT)
            ),
            receipt_timeout=float(
                os.environ.get("LPCLIENT_RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT)
            ),
            refresh_timeout=float(
                os.environ.get("LPCLIENT_REFRESH_TIMEOUT", DEFAULT_REFRESH_TIMEOUT)
            ),
            auto_connect=_env_flag("LPCLIENT_AUTO_CONNECT", True),
            host=os.environ.get("LPCLIENT_HOST", DEFAULT_HOST),
            port=int(os.environ.get("LPCLIENT_PORT", str(DEFAULT_PORT))),
            debug=_env_flag("LPCLIENT_DEBUG", False),
        )


DEFAULT_CLIENT_CONFIG = ClientConfig()
