"""Wallet session: connect/disconnect lifecycle and the active account."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from fundme.chain.schemas import PreparedCall
from fundme.errors import NotConnected, ProviderUnavailable, SubmissionFailed, UserRejected
from fundme.lib.formatting import normalize_address, same_address
from fundme.lib.logger import get_logger
from fundme.lib.metrics import METRICS
from fundme.wallet.providers import ProviderFactory, WalletProvider


logger = get_logger(__name__)


class SessionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


SessionListener = Callable[[SessionState, "str | None"], None]


class WalletWriter:
    """Write capability bound to one provider and one account."""

    def __init__(self, provider: WalletProvider, account: str) -> None:
        self.provider = provider
        self.account = account

    async def submit(self, prepared: PreparedCall) -> str:
        if not same_address(prepared.sender, self.account):
            raise SubmissionFailed("prepared call was simulated for a different account")
        return await self.provider.send_transaction(prepared)


class WalletSession:
    """Owns the active account and its write capability; both live and die together."""

    def __init__(self, provider_factory: ProviderFactory) -> None:
        self._provider_factory = provider_factory
        self._state = SessionState.DISCONNECTED
        self._account: str | None = None
        self._writer: WalletWriter | None = None
        self._listeners: list[SessionListener] = []
        # Bumped by every connect and disconnect; a connect only lands if still current
        self._attempt = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def account(self) -> str | None:
        return self._account

    @property
    def writer(self) -> WalletWriter | None:
        return self._writer

    def is_connected(self) -> bool:
        return self._state is SessionState.CONNECTED

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    async def connect(self) -> str:
        """Request accounts from the provider and activate the first one."""

        if self.is_connected() and self._account:
            return self._account

        METRICS.increment("wallet.connect.attempt")
        provider = self._provider_factory()
        if provider is None:
            METRICS.increment("wallet.connect.unavailable")
            logger.warning("wallet.connect.provider_missing")
            raise ProviderUnavailable("no wallet provider configured")

        self._attempt += 1
        attempt = self._attempt
        self._transition(SessionState.CONNECTING)
        try:
            accounts = await provider.request_accounts()
            if not accounts:
                raise UserRejected("provider returned no authorized accounts")
            account = normalize_address(accounts[0])
        except ValueError as exc:
            if attempt == self._attempt:
                self._reset()
            METRICS.increment("wallet.connect.error")
            raise UserRejected("provider returned a malformed account", cause=exc) from exc
        except Exception:
            if attempt == self._attempt:
                self._reset()
            METRICS.increment("wallet.connect.error")
            raise

        if attempt != self._attempt:
            # disconnect() or a newer connect() landed while the provider was answering
            METRICS.increment("wallet.connect.cancelled")
            logger.info("wallet.connect.cancelled", extra={"account": account})
            raise NotConnected("connection cancelled by disconnect")

        self._account = account
        self._writer = WalletWriter(provider, account)
        self._transition(SessionState.CONNECTED)
        METRICS.increment("wallet.connect.success")
        logger.info("wallet.connect.success", extra={"account": account, "provider": provider.name})
        return account

    def disconnect(self) -> None:
        """Drop local session state; injected providers expose no revoke call."""

        self._attempt += 1
        previous = self._account
        self._reset()
        METRICS.increment("wallet.disconnect")
        logger.info("wallet.disconnect", extra={"account": previous})

    def _reset(self) -> None:
        self._account = None
        self._writer = None
        self._transition(SessionState.DISCONNECTED)

    def _transition(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state, self._account)
