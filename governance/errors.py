from typing import Optional

from governance.enums.malformed_reason import MalformedReason


class GovernanceError(Exception):
    """Base class for every error raised by the governance client."""


class ValueOutOfRange(GovernanceError, ValueError):
    """A value does not fit the width declared for its field."""

    def __init__(self, field: str, value, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Value {value!r} out of range for field '{field}'")


class MalformedRecord(GovernanceError, ValueError):
    """
    Strict decode failure.

    `consumed` and `length` are set for TRAILING_BYTES so callers can tell
    padding apart from structural damage.
    """

    def __init__(
        self,
        reason: MalformedReason,
        message: str,
        field: Optional[str] = None,
        consumed: Optional[int] = None,
        length: Optional[int] = None,
    ):
        self.reason = reason
        self.field = field
        self.consumed = consumed
        self.length = length
        super().__init__(message)

    @property
    def is_trailing_bytes(self) -> bool:
        return self.reason is MalformedReason.TRAILING_BYTES


class UnrecoverableAccount(GovernanceError):
    """No candidate length of the account data decoded to a proposal."""

    def __init__(self, address: str, data_length: int):
        self.address = address
        self.data_length = data_length
        super().__init__(f"Account {address} ({data_length} bytes) is not a valid proposal record")


class ProposalNotFound(GovernanceError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Proposal account not found: {address}")


class TransportFailure(GovernanceError):
    """Raised by the RPC/HTTP boundary. Never retried here."""

    def __init__(self, method: str, message: str, code: Optional[int] = None):
        self.method = method
        self.code = code
        super().__init__(f"{method} failed: {message}")


class WalletNotConnected(GovernanceError):
    def __init__(self):
        super().__init__("Wallet not connected")
