"""Chain endpoint and JSON-RPC client tests."""

from __future__ import annotations

import pytest

from fundme.chain.endpoint import ChainEndpoint, encode_call
from fundme.constants import CONTRACT_ABI
from fundme.errors import EndpointUnreachable, RpcError, SimulationFailed
from fundme.lib.metrics import METRICS
from fundme.lib.rpc_client import JsonRpcClient, from_quantity

from conftest import ACCOUNT, CONTRACT, RPC_URL

FUND_SELECTOR = "0xb60d4288"


@pytest.fixture()
def endpoint(rpc: JsonRpcClient) -> ChainEndpoint:
    return ChainEndpoint(rpc, contract_address=CONTRACT, abi=CONTRACT_ABI)


def test_encode_call_produces_fund_selector() -> None:
    assert encode_call(CONTRACT_ABI, "fund") == FUND_SELECTOR


def test_encode_call_rejects_unknown_or_non_payable() -> None:
    abi = [{"type": "function", "name": "getOwner", "inputs": [], "stateMutability": "view"}]
    with pytest.raises(ValueError):
        encode_call(abi, "fund")
    with pytest.raises(ValueError):
        encode_call(abi, "getOwner")


@pytest.mark.asyncio
async def test_chain_identity_is_resolved_on_every_call(endpoint: ChainEndpoint, node) -> None:
    first = await endpoint.resolve_chain_identity()
    node.chain_id = 11155111
    second = await endpoint.resolve_chain_identity()

    assert first.chain_id == 31337
    assert second.chain_id == 11155111
    assert second.name == "Custom Chain"
    assert second.native_currency.symbol == "ETH"
    assert second.native_currency.decimals == 18
    assert second.rpc_url == RPC_URL
    assert node.count("eth_chainId") == 2
    assert endpoint.last_identity == second


@pytest.mark.asyncio
async def test_get_balance_reads_address(endpoint: ChainEndpoint, node) -> None:
    node.balances[CONTRACT.lower()] = 3 * 10**18

    assert await endpoint.get_balance(CONTRACT) == 3 * 10**18
    assert node.calls[-1] == ("eth_getBalance", [CONTRACT, "latest"])
    assert METRICS.get("chain.balance.success") == 1


@pytest.mark.asyncio
async def test_get_balance_unreachable(endpoint: ChainEndpoint, node) -> None:
    node.unreachable = True

    with pytest.raises(EndpointUnreachable):
        await endpoint.get_balance(CONTRACT)
    assert METRICS.get("chain.balance.error") == 1


@pytest.mark.asyncio
async def test_simulate_fund_returns_prepared_call(endpoint: ChainEndpoint, node) -> None:
    chain = await endpoint.resolve_chain_identity()
    prepared = await endpoint.simulate_fund(ACCOUNT, 10**15, chain)

    assert prepared.sender == ACCOUNT
    assert prepared.to == CONTRACT
    assert prepared.data == FUND_SELECTOR
    assert prepared.value == 10**15
    assert prepared.gas == 0x5208
    assert prepared.chain_id == 31337

    call_params = dict(node.calls)["eth_call"]
    assert call_params[0] == {"from": ACCOUNT, "to": CONTRACT, "data": FUND_SELECTOR, "value": hex(10**15)}
    assert call_params[1] == "latest"


@pytest.mark.asyncio
async def test_simulate_fund_revert_raises_simulation_failed(endpoint: ChainEndpoint, node) -> None:
    node.errors["eth_call"] = {"code": 3, "message": "execution reverted: You need to spend more ETH!", "data": "0x"}
    chain = await endpoint.resolve_chain_identity()

    with pytest.raises(SimulationFailed) as excinfo:
        await endpoint.simulate_fund(ACCOUNT, 1, chain)

    assert isinstance(excinfo.value.cause, RpcError)
    assert excinfo.value.cause.code == 3
    assert "eth_estimateGas" not in node.methods
    assert METRICS.get("chain.simulate.error") == 1


@pytest.mark.asyncio
async def test_rpc_client_surfaces_error_objects(rpc: JsonRpcClient, node) -> None:
    node.errors["eth_chainId"] = {"code": -32601, "message": "Method not found"}

    with pytest.raises(RpcError) as excinfo:
        await rpc.call("eth_chainId")
    assert excinfo.value.code == -32601
    assert excinfo.value.method == "eth_chainId"


def test_from_quantity() -> None:
    assert from_quantity("0x10") == 16
    assert from_quantity(5) == 5
    with pytest.raises(ValueError):
        from_quantity("16")
