"""Fixed chain, contract and UI constants."""

from __future__ import annotations

from typing import Any

# Anvil's default JSON-RPC listener
DEFAULT_RPC_URL: str = "http://127.0.0.1:8545"

# First contract deployed by the default Anvil deployer
DEFAULT_CONTRACT_ADDRESS: str = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

FUND_FUNCTION: str = "fund"

CONTRACT_ABI: tuple[dict[str, Any], ...] = (
    {
        "type": "function",
        "name": "fund",
        "inputs": [],
        "outputs": [],
        "stateMutability": "payable",
    },
)

NATIVE_CURRENCY_NAME: str = "Ether"
NATIVE_CURRENCY_SYMBOL: str = "ETH"
NATIVE_DECIMALS: int = 18
CUSTOM_CHAIN_NAME: str = "Custom Chain"

TOAST_DURATION_MS: int = 3000
NOTIFICATION_FEED_SIZE: int = 50
SHORT_HEX_START: int = 4
SHORT_HEX_END: int = 4
