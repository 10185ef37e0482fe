"""Contract balance read path."""

from __future__ import annotations

from pydantic import BaseModel

from fundme.chain.endpoint import ChainEndpoint
from fundme.constants import NATIVE_CURRENCY_SYMBOL
from fundme.errors import NotConnected
from fundme.lib.formatting import format_units, same_address, shorten_hex
from fundme.lib.logger import get_logger
from fundme.notifications.sink import NotificationSink
from fundme.wallet.session import WalletSession


logger = get_logger(__name__)


class BalanceReport(BaseModel):
    contract_address: str
    account: str
    account_short: str
    balance_wei: int
    balance: str
    message: str


class BalanceService:
    def __init__(self, session: WalletSession, endpoint: ChainEndpoint, sink: NotificationSink) -> None:
        self._session = session
        self._endpoint = endpoint
        self._sink = sink

    async def show_balance(self, account: str | None) -> BalanceReport:
        """Report the contract's balance next to the connected account."""

        if not account or not self._session.is_connected() or not same_address(self._session.account, account):
            raise NotConnected("balance requires a connected account")

        contract = self._endpoint.contract_address
        balance_wei = await self._endpoint.get_balance(contract)
        balance = format_units(balance_wei)
        account_short = shorten_hex(account)
        message = f"Balance for {account_short}: {balance} {NATIVE_CURRENCY_SYMBOL}"

        logger.info(
            "balance.read",
            extra={"contract": contract, "account": account, "balance_wei": str(balance_wei)},
        )
        self._sink.notify(message, "info")
        return BalanceReport(
            contract_address=contract,
            account=account,
            account_short=account_short,
            balance_wei=balance_wei,
            balance=balance,
            message=message,
        )
