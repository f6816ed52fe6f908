"""Bounded pool of pending transactions served in priority order."""

from __future__ import annotations

import itertools
import math
import threading
from dataclasses import dataclass
from typing import Any

from coldl3.txpool.errors import (
    InvalidTransactionError,
    PoolFullError,
    TransactionNotFoundError,
)
from coldl3.txpool.fee import FeeAlgorithm
from coldl3.txpool.priority import PriorityCalculator
from coldl3.txpool.transaction import Transaction

U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class PoolStats:
    """Occupancy of the pool."""

    total_transactions: int
    max_size: int
    utilization: float


@dataclass(frozen=True)
class TransactionWithMetadata:
    """A transaction together with its computed priority, fee and arrival time."""

    transaction: Transaction
    priority: int
    fee: int
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "transaction": self.transaction.to_dict(),
            "priority": self.priority,
            "fee": self.fee,
            "timestamp": self.timestamp,
        }


@dataclass
class TxPoolConfig:
    """Tunable limits and weights of the pool."""

    max_size: int = 10000
    min_fee: int = 1
    max_fee: int = U64_MAX
    priority_weight: float = 0.5
    fee_weight: float = 0.5


class TxPool:
    """Holds validated transactions and hands them out highest priority first."""

    def __init__(
        self,
        fee_algorithm: FeeAlgorithm,
        priority_calculator: PriorityCalculator,
        max_size: int,
    ) -> None:
        self._fee_algorithm = fee_algorithm
        self._priority_calculator = priority_calculator
        self._max_size = max_size
        self._transactions: dict[bytes, Transaction] = {}
        # hash -> (priority, insertion sequence)
        self._queue: dict[bytes, tuple[int, int]] = {}
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    def __contains__(self, tx_hash: object) -> bool:
        try:
            key = bytes(tx_hash)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            return False
        with self._lock:
            return key in self._transactions

    def _push(self, tx_hash: bytes, priority: int) -> None:
        self._queue[tx_hash] = (priority, next(self._sequence))

    def _is_valid(self, tx: Transaction) -> bool:
        if tx.fee == 0:
            return False
        if not tx.inputs or not tx.outputs:
            return False
        if tx.hash in self._transactions:
            return False
        return tx.fee >= self._fee_algorithm.calculate_fee(tx)

    def add_transaction(self, tx: Transaction) -> None:
        """Validate ``tx`` and admit it to the pool."""
        with self._lock:
            if len(self._transactions) >= self._max_size:
                raise PoolFullError()
            if not self._is_valid(tx):
                raise InvalidTransactionError()
            priority = self._priority_calculator.calculate_priority(tx)
            self._transactions[tx.hash] = tx
            self._push(tx.hash, priority)

    def get_transactions(self, limit: int) -> list[Transaction]:
        """Return up to ``limit`` transactions, highest priority first, leaving them pooled."""
        with self._lock:
            ordered = sorted(
                self._queue.items(), key=lambda item: (-item[1][0], item[1][1])
            )[: max(limit, 0)]
            for tx_hash, _ in ordered:
                del self._queue[tx_hash]
            selected = [
                self._transactions[tx_hash]
                for tx_hash, _ in ordered
                if tx_hash in self._transactions
            ]
            for tx in selected:
                try:
                    priority = self._priority_calculator.calculate_priority(tx)
                except Exception:
                    priority = 0
                self._push(tx.hash, priority)
            return selected

    def remove_transaction(self, tx_hash: bytes) -> None:
        """Drop the transaction with ``tx_hash`` from the pool."""
        key = bytes(tx_hash)
        with self._lock:
            if self._transactions.pop(key, None) is None:
                raise TransactionNotFoundError()
            self._queue.pop(key, None)

    def get(self, tx_hash: bytes) -> Transaction | None:
        """Return the pooled transaction with ``tx_hash``, if any."""
        with self._lock:
            return self._transactions.get(bytes(tx_hash))

    def stats(self) -> PoolStats:
        """Report how full the pool is."""
        with self._lock:
            count = len(self._transactions)
        if self._max_size:
            utilization = count / self._max_size
        else:
            utilization = math.inf if count else math.nan
        return PoolStats(
            total_transactions=count,
            max_size=self._max_size,
            utilization=utilization,
        )

    def clear(self) -> None:
        """Remove every transaction."""
        with self._lock:
            self._transactions.clear()
            self._queue.clear()

    def transactions_by_fee_range(self, min_fee: int, max_fee: int) -> list[Transaction]:
        """Return pooled transactions whose fee lies in ``[min_fee, max_fee]``."""
        with self._lock:
            return [
                tx for tx in self._transactions.values() if min_fee <= tx.fee <= max_fee
            ]

    def transactions_by_address(self, address: bytes) -> list[Transaction]:
        """Return pooled transactions that pay to ``address``."""
        target = bytes(address)
        with self._lock:
            return [
                tx
                for tx in self._transactions.values()
                if any(output.address == target for output in tx.outputs)
            ]