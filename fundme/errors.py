"""Error kinds raised by the wallet, chain and funding layers."""

from __future__ import annotations

from typing import Literal

InvalidAmountReason = Literal["empty", "nonPositive", "invalid"]


class FundingAppError(RuntimeError):
    """Base class for every recoverable failure surfaced to the UI boundary."""

    kind: str = "error"

    def __init__(self, detail: str = "", *, cause: BaseException | None = None) -> None:
        super().__init__(detail or self.kind)
        self.detail = detail or self.kind
        self.cause = cause


class ProviderUnavailable(FundingAppError):
    """No wallet provider is available at connect time."""

    kind = "provider_unavailable"


class UserRejected(FundingAppError):
    """The wallet declined an account or signing request."""

    kind = "user_rejected"


class NotConnected(FundingAppError):
    """An action requiring a connected account ran without one."""

    kind = "not_connected"


class SessionNotReady(FundingAppError):
    """The write capability vanished before submission."""

    kind = "session_not_ready"


class InvalidAmount(FundingAppError):
    kind = "invalid_amount"

    def __init__(self, reason: InvalidAmountReason, *, raw: str = "") -> None:
        super().__init__(f"amount rejected: {reason}")
        self.reason: InvalidAmountReason = reason
        self.raw = raw


class EndpointUnreachable(FundingAppError):
    """The chain node could not be reached over HTTP."""

    kind = "endpoint_unreachable"


class RpcError(FundingAppError):
    """The node answered with a JSON-RPC error object."""

    kind = "rpc_error"

    def __init__(self, method: str, code: int | None, message: str, data: object = None) -> None:
        super().__init__(f"{method} failed ({code}): {message}")
        self.method = method
        self.code = code
        self.message = message
        self.data = data


class SimulationFailed(FundingAppError):
    kind = "simulation_failed"


class SubmissionFailed(FundingAppError):
    kind = "submission_failed"
