"""Wallet providers: the account-access and signing capability the session connects to."""

from __future__ import annotations

from typing import Callable, Protocol

from eth_account import Account
from eth_account.signers.local import LocalAccount

from fundme.chain.schemas import PreparedCall
from fundme.config import Settings
from fundme.errors import EndpointUnreachable, RpcError, SubmissionFailed, UserRejected
from fundme.lib.formatting import normalize_address
from fundme.lib.logger import get_logger
from fundme.lib.metrics import METRICS
from fundme.lib.rpc_client import JsonRpcClient, from_quantity, to_quantity


logger = get_logger(__name__)

# EIP-1193 "User Rejected Request"
USER_REJECTED_CODE = 4001


class WalletProvider(Protocol):
    name: str

    async def request_accounts(self) -> list[str]: ...

    async def send_transaction(self, prepared: PreparedCall) -> str: ...


ProviderFactory = Callable[[], "WalletProvider | None"]


def _is_user_rejection(exc: RpcError) -> bool:
    return exc.code == USER_REJECTED_CODE


class RpcWalletProvider:
    """Accounts managed by the node itself (Anvil/Hardhat unlocked accounts, wallet RPC bridges)."""

    name = "rpc"

    def __init__(self, rpc: JsonRpcClient) -> None:
        self._rpc = rpc

    async def request_accounts(self) -> list[str]:
        try:
            accounts = await self._rpc.call("eth_requestAccounts")
        except RpcError as exc:
            if _is_user_rejection(exc):
                raise UserRejected("account request rejected", cause=exc) from exc
            raise EndpointUnreachable(exc.detail, cause=exc) from exc
        if not isinstance(accounts, list):
            raise EndpointUnreachable("eth_requestAccounts returned a non-list result")
        return [str(account) for account in accounts]

    async def send_transaction(self, prepared: PreparedCall) -> str:
        tx = {
            "from": prepared.sender,
            "to": prepared.to,
            "data": prepared.data,
            "value": to_quantity(prepared.value),
            "gas": to_quantity(prepared.gas),
            "chainId": to_quantity(prepared.chain_id),
        }
        try:
            tx_hash = await self._rpc.call("eth_sendTransaction", [tx])
        except RpcError as exc:
            if _is_user_rejection(exc):
                raise UserRejected("transaction rejected", cause=exc) from exc
            raise SubmissionFailed(exc.detail, cause=exc) from exc
        except EndpointUnreachable as exc:
            raise SubmissionFailed(exc.detail, cause=exc) from exc
        return str(tx_hash)


class LocalKeyWalletProvider:
    """Signs locally with a private key and broadcasts the raw transaction."""

    name = "local"

    def __init__(self, rpc: JsonRpcClient, private_key: str) -> None:
        self._rpc = rpc
        self._wallet: LocalAccount = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._wallet.address

    async def request_accounts(self) -> list[str]:
        return [self._wallet.address]

    async def send_transaction(self, prepared: PreparedCall) -> str:
        if prepared.sender.lower() != self._wallet.address.lower():
            raise SubmissionFailed("prepared call belongs to a different account")

        METRICS.increment("wallet.local.sign_attempt")
        try:
            nonce = from_quantity(
                await self._rpc.call("eth_getTransactionCount", [self._wallet.address, "pending"])
            )
            gas_price = from_quantity(await self._rpc.call("eth_gasPrice"))
            signed = self._wallet.sign_transaction(
                {
                    "to": normalize_address(prepared.to),
                    "data": prepared.data,
                    "value": prepared.value,
                    "gas": prepared.gas,
                    "gasPrice": gas_price,
                    "nonce": nonce,
                    "chainId": prepared.chain_id,
                }
            )
            raw_tx = "0x" + signed.raw_transaction.hex().removeprefix("0x")
            tx_hash = await self._rpc.call("eth_sendRawTransaction", [raw_tx])
        except (RpcError, EndpointUnreachable) as exc:
            METRICS.increment("wallet.local.sign_error")
            logger.warning(
                "wallet.local.submit_failed",
                extra={"account": self._wallet.address, "cause": exc.detail},
            )
            raise SubmissionFailed(exc.detail, cause=exc) from exc
        except (TypeError, ValueError) as exc:
            # Malformed node quantity or a transaction eth_account refuses to sign
            METRICS.increment("wallet.local.sign_error")
            raise SubmissionFailed(f"could not sign transaction: {exc}", cause=exc) from exc

        METRICS.increment("wallet.local.sign_success")
        return str(tx_hash)


def build_provider_factory(settings: Settings, rpc: JsonRpcClient) -> ProviderFactory:
    """Return a factory that resolves the configured provider at call time."""

    def factory() -> WalletProvider | None:
        if settings.wallet_provider == "rpc":
            return RpcWalletProvider(rpc)
        if settings.wallet_provider == "local" and settings.wallet_private_key:
            return LocalKeyWalletProvider(rpc, settings.wallet_private_key)
        return None

    return factory
