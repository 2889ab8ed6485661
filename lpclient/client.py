"""Wiring of the pool client components."""

from __future__ import annotations

import structlog

from lpclient.config import ClientConfig
from lpclient.models.deployment import PoolDeployment, load_deployment
from lpclient.models.state import SessionState
from lpclient.state_machine import GatewayFactory, SessionStateMachine
from lpclient.wallet.provider import Signer, WalletProvider, Web3WalletProvider
from lpclient.wallet.session import WalletSessionManager

logger = structlog.get_logger()


def create_client(
    deployment: PoolDeployment,
    provider: WalletProvider | None,
    gateway_factory: GatewayFactory,
    config: ClientConfig | None = None,
) -> SessionStateMachine:
    """Build a state machine around a fresh session state.

    Args:
        deployment: Pool deployment metadata
        provider: Wallet provider, or None when no wallet is available
        gateway_factory: Builds a gateway for the connected signer
        config: Timeouts (default: ClientConfig())
    """
    state = SessionState()
    wallet = WalletSessionManager(state, provider)
    return SessionStateMachine(
        state=state,
        wallet=wallet,
        deployment=deployment,
        gateway_factory=gateway_factory,
        config=config or ClientConfig(),
    )


def create_web3_client(config: ClientConfig) -> SessionStateMachine:
    """Build a client talking to the JSON-RPC wallet at config.rpc_url.

    Raises:
        ValueError: If no deployment file is configured
    """
    from lpclient.gateway.web3_gateway import Web3PoolGateway

    if not config.deployment_file:
        raise ValueError("LPCLIENT_DEPLOYMENT_FILE must point to the pool deployment metadata")
    deployment = load_deployment(config.deployment_file)
    provider = Web3WalletProvider.from_url(config.rpc_url)

    def gateway_factory(signer: Signer) -> Web3PoolGateway:
        return Web3PoolGateway(
            provider.w3, deployment, signer, receipt_timeout=config.receipt_timeout
        )

    logger.info(
        "client_configured",
        rpc_url=config.rpc_url[:50],
        pool=deployment.pool_address,
        token_a=deployment.tokens.a.symbol,
        token_b=deployment.tokens.b.symbol,
    )
    return create_client(deployment, provider, gateway_factory, config)


_default_client: SessionStateMachine | None = None


def get_default_client() -> SessionStateMachine:
    """Process-wide client configured from the environment, created on first use."""
    global _default_client
    if _default_client is None:
        _default_client = create_web3_client(ClientConfig.from_env())
    return _default_client
