"""Chain identity and prepared-call records."""

from __future__ import annotations

from dataclasses import dataclass, field

from fundme.constants import (
    CUSTOM_CHAIN_NAME,
    NATIVE_CURRENCY_NAME,
    NATIVE_CURRENCY_SYMBOL,
    NATIVE_DECIMALS,
)


@dataclass(frozen=True)
class NativeCurrency:
    name: str = NATIVE_CURRENCY_NAME
    symbol: str = NATIVE_CURRENCY_SYMBOL
    decimals: int = NATIVE_DECIMALS


@dataclass(frozen=True)
class ChainIdentity:
    """Descriptor of the chain the node reports being on."""

    chain_id: int
    rpc_url: str
    name: str = CUSTOM_CHAIN_NAME
    native_currency: NativeCurrency = field(default_factory=NativeCurrency)


@dataclass(frozen=True)
class PreparedCall:
    """Dry-run output ready to be submitted once by ``sender``."""

    sender: str
    to: str
    data: str
    value: int
    gas: int
    chain_id: int
