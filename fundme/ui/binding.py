"""UI binding: named user actions and the view state they drive.

Each action is the boundary where failures stop. Every error becomes exactly
one warning on the notification sink and the binding stays usable afterwards.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from pydantic import BaseModel

from fundme.balance.service import BalanceReport, BalanceService
from fundme.chain.endpoint import ChainEndpoint
from fundme.config import Settings
from fundme.constants import CONTRACT_ABI, FUND_FUNCTION
from fundme.errors import (
    EndpointUnreachable,
    FundingAppError,
    InvalidAmount,
    NotConnected,
    ProviderUnavailable,
    SessionNotReady,
    UserRejected,
)
from fundme.funding.service import FundingPipeline
from fundme.lib.formatting import shorten_hex
from fundme.lib.logger import get_logger
from fundme.lib.rpc_client import JsonRpcClient
from fundme.notifications.sink import NotificationSink, build_sink
from fundme.wallet.providers import ProviderFactory, build_provider_factory
from fundme.wallet.session import SessionState, WalletSession


logger = get_logger(__name__)

CONNECT_FIRST = "Connect your wallet first."
GENERIC_FAILURE = "Something went wrong. Please try again."

_STATIC_MESSAGES: dict[type[FundingAppError], str] = {
    ProviderUnavailable: "Wallet provider not detected. Configure a wallet provider to continue.",
    UserRejected: "Wallet request was rejected.",
    NotConnected: CONNECT_FIRST,
    InvalidAmount: "Set a valid positive amount in the input to buy a coffee.",
    SessionNotReady: "Wallet client not ready. Click Connect again.",
}


class ConnectionView(BaseModel):
    state: SessionState
    label: str
    is_disconnect: bool
    status: str


class BalanceActionView(BaseModel):
    enabled: bool
    reason: str


class UiState(BaseModel):
    connection: ConnectionView
    balance_action: BalanceActionView
    pending: list[str]
    account: str | None


class UiBinding:
    def __init__(
        self,
        session: WalletSession,
        pipeline: FundingPipeline,
        balances: BalanceService,
        sink: NotificationSink,
        *,
        rpc_url: str,
    ) -> None:
        self.session = session
        self.pipeline = pipeline
        self.balances = balances
        self.sink = sink
        self.rpc_url = rpc_url
        self._pending: set[str] = set()
        self.connection = self._connection_view(session.state, session.account)
        self.balance_action = self._balance_view(session.is_connected())
        session.add_listener(self._on_session_change)

    # -- observable state -------------------------------------------------

    def snapshot(self) -> UiState:
        return UiState(
            connection=self.connection,
            balance_action=self.balance_action,
            pending=sorted(self._pending),
            account=self.session.account,
        )

    def _on_session_change(self, state: SessionState, account: str | None) -> None:
        self.connection = self._connection_view(state, account)
        self.balance_action = self._balance_view(state is SessionState.CONNECTED)

    @staticmethod
    def _connection_view(state: SessionState, account: str | None) -> ConnectionView:
        connected = state is SessionState.CONNECTED
        return ConnectionView(
            state=state,
            label="Disconnect" if connected else "Connect",
            is_disconnect=connected,
            status=f"Connected: {shorten_hex(account)}" if connected and account else "",
        )

    @staticmethod
    def _balance_view(enabled: bool) -> BalanceActionView:
        # Stays clickable either way so a premature click explains itself
        return BalanceActionView(enabled=enabled, reason="" if enabled else "Connect your wallet first")

    # -- actions ----------------------------------------------------------

    async def toggle_connection(self) -> str | None:
        with self._action("connection"):
            if self.session.state is not SessionState.DISCONNECTED:
                # A click while connecting cancels the pending request
                self.session.disconnect()
                return None
            try:
                return await self.session.connect()
            except NotConnected:
                # Cancelled by a disconnect that landed mid-request
                return None
            except EndpointUnreachable as exc:
                self._warn(exc, "Could not reach the wallet provider.")
            except Exception as exc:
                self._warn(exc)
        return None

    async def show_balance(self) -> BalanceReport | None:
        with self._action("balance"):
            if not self.session.is_connected():
                self.sink.notify(CONNECT_FIRST, "warn")
                return None
            try:
                return await self.balances.show_balance(self.session.account)
            except EndpointUnreachable as exc:
                self._warn(exc, f"Failed to fetch balance. Is the node running at {self.rpc_url}?")
            except Exception as exc:
                self._warn(exc)
        return None

    async def submit_funding(self, raw_amount: str) -> str | None:
        with self._action("funding"):
            try:
                return await self.pipeline.fund(raw_amount, self.session.account)
            except Exception as exc:
                self._warn(exc, f"Funding failed. Check your wallet network ({self.rpc_url}) and try again.")
        return None

    @contextmanager
    def _action(self, name: str) -> Iterator[None]:
        self._pending.add(name)
        try:
            yield
        finally:
            self._pending.discard(name)

    def _warn(self, exc: Exception, fallback: str = GENERIC_FAILURE) -> None:
        if isinstance(exc, FundingAppError):
            message = _STATIC_MESSAGES.get(type(exc), fallback)
            cause = exc.cause
            logger.warning(
                "ui.action.failed",
                extra={"kind": exc.kind, "detail": exc.detail, "cause": repr(cause) if cause else None},
            )
        else:
            message = fallback
            logger.exception("ui.action.crashed")
        self.sink.notify(message, "warn")


def build_binding(
    settings: Settings,
    *,
    rpc: JsonRpcClient | None = None,
    provider_factory: ProviderFactory | None = None,
    sink: NotificationSink | None = None,
) -> UiBinding:
    """Wire session, endpoint, pipeline and sink from settings."""

    rpc = rpc or JsonRpcClient(settings.rpc_url, timeout=settings.rpc_timeout_seconds)
    sink = sink or build_sink(settings.notification_sink)
    endpoint = ChainEndpoint(
        rpc,
        contract_address=settings.contract_address,
        abi=CONTRACT_ABI,
        fund_function=FUND_FUNCTION,
    )
    session = WalletSession(provider_factory or build_provider_factory(settings, rpc))
    return UiBinding(
        session,
        FundingPipeline(session, endpoint, sink),
        BalanceService(session, endpoint, sink),
        sink,
        rpc_url=settings.rpc_url,
    )
