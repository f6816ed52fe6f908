"""Priority calculators that order transactions in the pool."""

from __future__ import annotations

import math
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from coldl3.txpool.transaction import Transaction

U64_MAX = (1 << 64) - 1

Clock = Callable[[], float]


def _to_u64(value: float) -> int:
    """Convert a float to an unsigned 64-bit integer, truncating and saturating."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= float(1 << 64):
        return U64_MAX
    return int(value)


class PriorityCalculator(ABC):
    """Assigns each transaction a priority; higher is served first."""

    def __init__(self, min_priority: int = 0, max_priority: int = U64_MAX) -> None:
        self._min_priority = min_priority
        self._max_priority = max_priority

    @property
    def min_priority(self) -> int:
        return self._min_priority

    @property
    def max_priority(self) -> int:
        return self._max_priority

    @abstractmethod
    def calculate_priority(self, tx: Transaction) -> int:
        """Return the priority of ``tx``."""

    def _clamp(self, priority: int) -> int:
        return min(max(priority, self._min_priority), self._max_priority)


class _ClockedCalculator(PriorityCalculator):
    def __init__(self, clock: Clock | None) -> None:
        super().__init__()
        self._clock = clock if clock is not None else time.time

    def _age(self, tx: Transaction) -> int:
        return max(0, int(self._clock()) - tx.timestamp)


class SimplePriorityCalculator(PriorityCalculator):
    """Priority equal to the fee."""

    def calculate_priority(self, tx: Transaction) -> int:
        return self._clamp(tx.fee)


class TimeBasedPriorityCalculator(_ClockedCalculator):
    """Priority that decays linearly with the transaction's age."""

    def __init__(
        self,
        base_priority: int = 1000,
        time_decay_rate: float = 0.1,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock)
        self.base_priority = base_priority
        self.time_decay_rate = time_decay_rate

    def calculate_priority(self, tx: Transaction) -> int:
        decay = min(float(self._age(tx)) * self.time_decay_rate, 1.0)
        return self._clamp(_to_u64(float(self.base_priority) * (1.0 - decay)))


class MultiFactorPriorityCalculator(_ClockedCalculator):
    """Weighted blend of fee, freshness and compactness."""

    def __init__(
        self,
        fee_weight: float = 0.5,
        time_weight: float = 0.3,
        size_weight: float = 0.2,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock)
        self.fee_weight = fee_weight
        self.time_weight = time_weight
        self.size_weight = size_weight

    def calculate_priority(self, tx: Transaction) -> int:
        fee_score = tx.fee / 1000.0
        time_score = 1.0 / (1.0 + self._age(tx) / 3600.0)
        size_score = 1.0 / (1.0 + tx.size / 10.0)
        combined = (
            fee_score * self.fee_weight
            + time_score * self.time_weight
            + size_score * self.size_weight
        )
        return self._clamp(_to_u64(combined * 1000.0))