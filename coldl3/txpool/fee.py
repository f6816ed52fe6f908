"""Pluggable fee algorithms for the transaction pool."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

from coldl3.txpool.errors import FeeError
from coldl3.txpool.transaction import Transaction

U64_MAX = (1 << 64) - 1
DEFAULT_PRIORITY_MULTIPLIERS = (1.0, 1.5, 2.0, 3.0, 5.0)


def _to_u64(value: float) -> int:
    """Convert a float to an unsigned 64-bit integer, truncating and saturating."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= float(1 << 64):
        return U64_MAX
    return int(value)


class FeeAlgorithm(ABC):
    """Computes the minimum fee a transaction must pay."""

    def __init__(self, min_fee: int = 1, max_fee: int = U64_MAX) -> None:
        self._min_fee = min_fee
        self._max_fee = max_fee

    @property
    def min_fee(self) -> int:
        return self._min_fee

    @property
    def max_fee(self) -> int:
        return self._max_fee

    @abstractmethod
    def calculate_fee(self, tx: Transaction) -> int:
        """Return the fee required for ``tx``."""

    def _clamp(self, fee: int) -> int:
        return min(max(fee, self._min_fee), self._max_fee)

    @staticmethod
    def _size_fee(base_fee: int, tx: Transaction) -> int:
        fee = base_fee * tx.size
        if fee > U64_MAX:
            raise FeeError("fee overflow")
        return fee


class SimpleFeeAlgorithm(FeeAlgorithm):
    """Fee proportional to the number of inputs and outputs."""

    def __init__(self, base_fee: int, min_fee: int = 1, max_fee: int = U64_MAX) -> None:
        super().__init__(min_fee, max_fee)
        self.base_fee = base_fee

    def calculate_fee(self, tx: Transaction) -> int:
        return self._clamp(self._size_fee(self.base_fee, tx))


class DynamicFeeAlgorithm(FeeAlgorithm):
    """Size-based fee scaled by a network congestion multiplier."""

    def __init__(self, base_fee: int, congestion_multiplier: float = 1.0) -> None:
        super().__init__()
        self.base_fee = base_fee
        self.congestion_multiplier = congestion_multiplier

    def calculate_fee(self, tx: Transaction) -> int:
        base = self._size_fee(self.base_fee, tx)
        return self._clamp(_to_u64(float(base) * self.congestion_multiplier))


class PriorityFeeAlgorithm(FeeAlgorithm):
    """Size-based fee scaled by a multiplier chosen from the offered fee level."""

    def __init__(self, base_fee: int, multipliers: Sequence[float] | None = None) -> None:
        super().__init__()
        chosen = tuple(DEFAULT_PRIORITY_MULTIPLIERS if multipliers is None else multipliers)
        if not chosen:
            raise ValueError("at least one priority multiplier is required")
        self.base_fee = base_fee
        self._multipliers = chosen

    @property
    def multipliers(self) -> tuple[float, ...]:
        return self._multipliers

    def calculate_fee(self, tx: Transaction) -> int:
        base = self._size_fee(self.base_fee, tx)
        level = min(tx.fee, len(self._multipliers) - 1)
        return self._clamp(_to_u64(float(base) * self._multipliers[level]))