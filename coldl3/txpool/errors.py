"""Exceptions raised by the transaction pool."""

from __future__ import annotations


class TxPoolError(Exception):
    """Base class for every transaction pool failure."""

    label = "Transaction pool error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(self._render())

    def _render(self) -> str:
        return f"{self.label}: {self.detail}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TxPoolError):
            return NotImplemented
        return type(self) is type(other) and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((type(self), self.detail))


class _FixedMessageError(TxPoolError):
    """An error whose message carries no detail."""

    def __init__(self) -> None:
        super().__init__("")

    def _render(self) -> str:
        return self.label


class PoolFullError(_FixedMessageError):
    label = "Transaction pool is full"


class InvalidTransactionError(_FixedMessageError):
    label = "Invalid transaction"


class TransactionNotFoundError(_FixedMessageError):
    label = "Transaction not found"


class InsufficientFeeError(_FixedMessageError):
    label = "Insufficient fee"


class DuplicateTransactionError(_FixedMessageError):
    label = "Duplicate transaction"


class TxValidationError(TxPoolError):
    label = "Validation error"


class PriorityError(TxPoolError):
    label = "Priority calculation error"


class FeeError(TxPoolError):
    label = "Fee calculation error"


class TxIOError(TxPoolError):
    label = "IO error"


class TxSerializationError(TxPoolError):
    label = "Serialization error"