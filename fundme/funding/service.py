"""Funding pipeline: validate, simulate, guard, submit, report."""

from __future__ import annotations

from fundme.chain.endpoint import ChainEndpoint
from fundme.errors import FundingAppError, InvalidAmount, NotConnected, SessionNotReady
from fundme.funding.amount import parse_amount
from fundme.lib.formatting import same_address
from fundme.lib.logger import get_logger
from fundme.lib.metrics import METRICS
from fundme.notifications.sink import NotificationSink
from fundme.wallet.session import WalletSession


logger = get_logger(__name__)


class FundingPipeline:
    """Runs one funding attempt per call; every stage fails fast and nothing retries."""

    def __init__(self, session: WalletSession, endpoint: ChainEndpoint, sink: NotificationSink) -> None:
        self._session = session
        self._endpoint = endpoint
        self._sink = sink

    async def fund(self, raw_amount: str, account: str | None) -> str:
        """Submit ``fund()`` carrying ``raw_amount`` from ``account`` and return the tx hash."""

        METRICS.increment("funding.attempt")
        try:
            tx_hash = await self._run(raw_amount, account)
        except FundingAppError as exc:
            METRICS.increment(f"funding.error.{exc.kind}")
            raise
        METRICS.increment("funding.success")
        return tx_hash

    async def _run(self, raw_amount: str, account: str | None) -> str:
        if not account or not self._session.is_connected() or not same_address(self._session.account, account):
            raise NotConnected("funding requires the currently connected account")

        amount = parse_amount(raw_amount)
        if not amount.ok or amount.value is None:
            logger.info("funding.amount.rejected", extra={"raw": amount.raw, "reason": amount.reason})
            raise InvalidAmount(amount.reason or "invalid", raw=amount.raw)

        chain = await self._endpoint.resolve_chain_identity()
        prepared = await self._endpoint.simulate_fund(account, amount.value, chain)

        # A disconnect or account switch may have landed while awaiting the node
        writer = self._session.writer
        if writer is None or not same_address(writer.account, prepared.sender):
            logger.warning(
                "funding.submit.session_not_ready",
                extra={"account": account, "chain_id": chain.chain_id},
            )
            raise SessionNotReady("write capability missing or bound to another account")

        log_context = {
            "account": account,
            "value": str(prepared.value),
            "gas": prepared.gas,
            "chain_id": prepared.chain_id,
            "provider": writer.provider.name,
        }
        logger.info("funding.submit.attempt", extra=log_context)
        try:
            tx_hash = await writer.submit(prepared)
        except FundingAppError as exc:
            logger.warning("funding.submit.failed", extra={**log_context, "kind": exc.kind, "cause": exc.detail})
            raise

        logger.info("funding.submit.success", extra={**log_context, "tx_hash": tx_hash})
        self._sink.notify_tx_submitted(tx_hash)
        return tx_hash
