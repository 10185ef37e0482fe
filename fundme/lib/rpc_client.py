"""JSON-RPC 2.0 client for the chain node."""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from fundme.errors import EndpointUnreachable, RpcError
from fundme.lib.logger import get_logger


logger = get_logger(__name__)


class JsonRpcClient:
    """Thin wrapper that POSTs JSON-RPC requests to a single node URL."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Perform one JSON-RPC request and return its ``result`` member."""

        request_id = next(self._ids)
        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params or []}

        try:
            logger.debug("rpc.request", extra={"method": method, "url": self.url, "request_id": request_id})
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            detail = exc.response.text[:200]
            logger.warning(
                "rpc.request.http_error",
                extra={"method": method, "url": self.url, "status": status, "detail": detail},
            )
            raise EndpointUnreachable(f"{method} failed with HTTP {status}", cause=exc) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "rpc.request.network_error",
                extra={"method": method, "url": self.url, "error": repr(exc)},
            )
            raise EndpointUnreachable(f"{method} failed (network)", cause=exc) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise EndpointUnreachable(f"{method} returned invalid JSON", cause=exc) from exc

        if not isinstance(data, dict):
            raise EndpointUnreachable(f"{method} returned an unexpected response shape")

        error = data.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            extra_data = error.get("data") if isinstance(error, dict) else None
            logger.info(
                "rpc.request.error_response",
                extra={"method": method, "code": code, "detail": str(message)[:200]},
            )
            raise RpcError(method, code, str(message), extra_data)

        if "result" not in data:
            raise EndpointUnreachable(f"{method} response carried no result")

        return data["result"]


def to_quantity(value: int) -> str:
    """Encode an integer as a JSON-RPC hex quantity."""

    return hex(value)


def from_quantity(value: Any) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.startswith(("0x", "0X")):
        return int(value, 16)
    raise ValueError(f"Not a hex quantity: {value!r}")
