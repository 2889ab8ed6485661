"""Wallet provider boundary and session manager."""

from lpclient.wallet.provider import Signer, WalletProvider, Web3WalletProvider
from lpclient.wallet.session import WalletSessionManager

__all__ = ["Signer", "WalletProvider", "Web3WalletProvider", "WalletSessionManager"]
