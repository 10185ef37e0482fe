"""Pytest fixtures for the funding app tests."""

import asyncio
from collections.abc import AsyncIterator, Iterator
import json
import os
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("RPC_URL", "http://node.test:8545")
os.environ.setdefault("WALLET_PROVIDER", "rpc")
os.environ.setdefault("NOTIFICATION_SINK", "feed")

from fundme.chain.schemas import PreparedCall
from fundme.config import Settings
from fundme.lib.metrics import METRICS
from fundme.lib.rpc_client import JsonRpcClient
from fundme.main import create_app
from fundme.ui.binding import UiBinding, build_binding

# Anvil's first prefunded account and its well-known development key
ACCOUNT = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ACCOUNT_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
OTHER_ACCOUNT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH = "0x" + "ab12" * 16
RPC_URL = "http://node.test:8545"


class FakeNode:
    """Scriptable JSON-RPC node served through ``httpx.MockTransport``."""

    def __init__(self, chain_id: int = 31337) -> None:
        self.chain_id = chain_id
        self.accounts: list[str] = [ACCOUNT]
        self.balances: dict[str, int] = {}
        self.errors: dict[str, dict[str, Any]] = {}
        self.gas = 0x5208
        self.gas_price = 1_000_000_000
        self.nonce = 7
        self.tx_hash = TX_HASH
        self.unreachable = False
        self.calls: list[tuple[str, list[Any]]] = []

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    def count(self, method: str) -> int:
        return self.methods.count(method)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        body = json.loads(request.content)
        method, params = body["method"], body.get("params", [])
        self.calls.append((method, params))
        if method in self.errors:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": self.errors[method]})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": self._result(method, params)})

    def _result(self, method: str, params: list[Any]) -> Any:
        if method == "eth_chainId":
            return hex(self.chain_id)
        if method == "eth_getBalance":
            return hex(self.balances.get(params[0].lower(), 0))
        if method == "eth_call":
            return "0x"
        if method == "eth_estimateGas":
            return hex(self.gas)
        if method == "eth_requestAccounts":
            return list(self.accounts)
        if method == "eth_getTransactionCount":
            return hex(self.nonce)
        if method == "eth_gasPrice":
            return hex(self.gas_price)
        if method in {"eth_sendTransaction", "eth_sendRawTransaction"}:
            return self.tx_hash
        raise AssertionError(f"unexpected method {method}")


class GatedProvider:
    """Wallet provider whose account request blocks until the test opens the gate."""

    name = "gated"

    def __init__(self, accounts: list[str]) -> None:
        self.accounts = accounts
        self.gate = asyncio.Event()

    async def request_accounts(self) -> list[str]:
        await self.gate.wait()
        return list(self.accounts)

    async def send_transaction(self, prepared: PreparedCall) -> str:
        return TX_HASH


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    METRICS.reset()
    yield
    METRICS.reset()


@pytest.fixture()
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        rpc_url=RPC_URL,
        contract_address=CONTRACT,
        wallet_provider="rpc",
        notification_sink="feed",
        _env_file=None,
    )


@pytest.fixture()
def rpc(node: FakeNode) -> JsonRpcClient:
    return JsonRpcClient(RPC_URL, transport=node.transport())


@pytest.fixture()
def binding(settings: Settings, rpc: JsonRpcClient) -> UiBinding:
    return build_binding(settings, rpc=rpc)


@pytest.fixture()
def app(settings: Settings, binding: UiBinding) -> FastAPI:
    return create_app(settings, binding)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an `httpx.AsyncClient` wired to the ASGI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
