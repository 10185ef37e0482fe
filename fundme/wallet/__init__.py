"""Wallet providers and the connect/disconnect session."""

from fundme.wallet.providers import LocalKeyWalletProvider, RpcWalletProvider, WalletProvider
from fundme.wallet.session import SessionState, WalletSession, WalletWriter

__all__ = [
    "LocalKeyWalletProvider",
    "RpcWalletProvider",
    "SessionState",
    "WalletProvider",
    "WalletSession",
    "WalletWriter",
]
