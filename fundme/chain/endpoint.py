"""Read-only access to the chain node: identity, balances and dry-runs."""

from __future__ import annotations

from typing import Any, Iterable

from eth_utils import function_signature_to_4byte_selector

from fundme.chain.schemas import ChainIdentity, PreparedCall
from fundme.errors import EndpointUnreachable, RpcError, SimulationFailed
from fundme.lib.logger import get_logger
from fundme.lib.metrics import METRICS
from fundme.lib.rpc_client import JsonRpcClient, from_quantity, to_quantity


logger = get_logger(__name__)


def encode_call(abi: Iterable[dict[str, Any]], function_name: str, *, payable: bool = True) -> str:
    """Return calldata for an argument-less ABI function."""

    entry = next(
        (item for item in abi if item.get("type") == "function" and item.get("name") == function_name),
        None,
    )
    if entry is None:
        raise ValueError(f"ABI has no function named {function_name!r}")
    if entry.get("inputs"):
        raise ValueError(f"{function_name} takes arguments; only argument-less calls are supported")
    if payable and entry.get("stateMutability") != "payable":
        raise ValueError(f"{function_name} is not payable")

    selector = function_signature_to_4byte_selector(f"{function_name}()")
    return "0x" + selector.hex()


class ChainEndpoint:
    """Node queries used by the balance read path and the funding pipeline."""

    def __init__(
        self,
        rpc: JsonRpcClient,
        *,
        contract_address: str,
        abi: Iterable[dict[str, Any]],
        fund_function: str = "fund",
    ) -> None:
        self._rpc = rpc
        self.contract_address = contract_address
        self._fund_calldata = encode_call(abi, fund_function)
        self.last_identity: ChainIdentity | None = None

    @property
    def rpc_url(self) -> str:
        return self._rpc.url

    async def resolve_chain_identity(self) -> ChainIdentity:
        """Ask the node for its chain id; never served from cache."""

        try:
            raw = await self._rpc.call("eth_chainId")
            chain_id = from_quantity(raw)
        except RpcError as exc:
            raise EndpointUnreachable("eth_chainId rejected by node", cause=exc) from exc
        except ValueError as exc:
            raise EndpointUnreachable("eth_chainId returned a malformed quantity", cause=exc) from exc

        identity = ChainIdentity(chain_id=chain_id, rpc_url=self._rpc.url)
        self.last_identity = identity
        logger.info("chain.identity.resolved", extra={"chain_id": chain_id, "rpc_url": self._rpc.url})
        return identity

    async def get_balance(self, address: str) -> int:
        METRICS.increment("chain.balance.attempt")
        try:
            raw = await self._rpc.call("eth_getBalance", [address, "latest"])
            balance = from_quantity(raw)
        except RpcError as exc:
            METRICS.increment("chain.balance.error")
            raise EndpointUnreachable("eth_getBalance rejected by node", cause=exc) from exc
        except ValueError as exc:
            METRICS.increment("chain.balance.error")
            raise EndpointUnreachable("eth_getBalance returned a malformed quantity", cause=exc) from exc
        except EndpointUnreachable:
            METRICS.increment("chain.balance.error")
            raise

        METRICS.increment("chain.balance.success")
        return balance

    async def simulate_fund(self, account: str, value: int, chain: ChainIdentity) -> PreparedCall:
        """Dry-run ``fund()`` with ``value`` from ``account`` and estimate its gas."""

        call = {
            "from": account,
            "to": self.contract_address,
            "data": self._fund_calldata,
            "value": to_quantity(value),
        }
        log_context = {
            "account": account,
            "contract": self.contract_address,
            "value": str(value),
            "chain_id": chain.chain_id,
        }

        METRICS.increment("chain.simulate.attempt")
        logger.info("chain.simulate.attempt", extra=log_context)
        try:
            await self._rpc.call("eth_call", [call, "latest"])
            gas = from_quantity(await self._rpc.call("eth_estimateGas", [call]))
        except (RpcError, EndpointUnreachable) as exc:
            METRICS.increment("chain.simulate.error")
            logger.warning("chain.simulate.failed", extra={**log_context, "cause": exc.detail})
            raise SimulationFailed(exc.detail, cause=exc) from exc
        except ValueError as exc:
            METRICS.increment("chain.simulate.error")
            logger.warning("chain.simulate.failed", extra={**log_context, "cause": str(exc)})
            raise SimulationFailed("eth_estimateGas returned a malformed quantity", cause=exc) from exc

        METRICS.increment("chain.simulate.success")
        logger.info("chain.simulate.success", extra={**log_context, "gas": gas})
        return PreparedCall(
            sender=account,
            to=self.contract_address,
            data=self._fund_calldata,
            value=value,
            gas=gas,
            chain_id=chain.chain_id,
        )
