"""Transaction types held by the pool."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

HASH_SIZE = 32
U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1


def _fixed_bytes(name: str, value: Any, size: int) -> bytes:
    try:
        data = bytes(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"`{name}` must be bytes") from exc
    if len(data) != size:
        raise ValueError(f"`{name}` must be {size} bytes, got {len(data)}")
    return data


def _any_bytes(name: str, value: Any) -> bytes:
    try:
        return bytes(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"`{name}` must be bytes") from exc


def _unsigned(name: str, value: Any, limit: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"`{name}` must be an integer")
    if not 0 <= value <= limit:
        raise ValueError(f"`{name}` out of range")
    return value


def _bytes_from_list(name: str, value: Any) -> bytes:
    if not isinstance(value, list):
        raise ValueError(f"`{name}` must be an array of bytes")
    return bytes(_unsigned(name, item, 255) for item in value)


def _require(data: Any, names: tuple[str, ...]) -> None:
    if not isinstance(data, dict):
        raise ValueError("expected an object")
    for name in names:
        if name not in data:
            raise ValueError(f"missing field `{name}`")


@dataclass(frozen=True)
class TxInput:
    """A reference to a previous output together with its signature."""

    prev_tx_hash: bytes
    output_index: int
    signature: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "prev_tx_hash", _fixed_bytes("prev_tx_hash", self.prev_tx_hash, HASH_SIZE))
        _unsigned("output_index", self.output_index, U32_MAX)
        object.__setattr__(self, "signature", _any_bytes("signature", self.signature))

    def to_dict(self) -> dict[str, Any]:
        return {
            "prev_tx_hash": list(self.prev_tx_hash),
            "output_index": self.output_index,
            "signature": list(self.signature),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxInput:
        _require(data, ("prev_tx_hash", "output_index", "signature"))
        return cls(
            prev_tx_hash=_bytes_from_list("prev_tx_hash", data["prev_tx_hash"]),
            output_index=data["output_index"],
            signature=_bytes_from_list("signature", data["signature"]),
        )


@dataclass(frozen=True)
class TxOutput:
    """An amount paid to an address, with its commitment."""

    amount: int
    address: bytes
    commitment: bytes

    def __post_init__(self) -> None:
        _unsigned("amount", self.amount, U64_MAX)
        object.__setattr__(self, "address", _any_bytes("address", self.address))
        object.__setattr__(self, "commitment", _fixed_bytes("commitment", self.commitment, HASH_SIZE))

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "address": list(self.address),
            "commitment": list(self.commitment),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxOutput:
        _require(data, ("amount", "address", "commitment"))
        return cls(
            amount=data["amount"],
            address=_bytes_from_list("address", data["address"]),
            commitment=_bytes_from_list("commitment", data["commitment"]),
        )


@dataclass(frozen=True)
class Transaction:
    """A transaction identified by its 32-byte hash."""

    hash: bytes
    inputs: tuple[TxInput, ...] = field(default_factory=tuple)
    outputs: tuple[TxOutput, ...] = field(default_factory=tuple)
    fee: int = 0
    timestamp: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", _fixed_bytes("hash", self.hash, HASH_SIZE))
        inputs = tuple(self.inputs)
        outputs = tuple(self.outputs)
        if not all(isinstance(item, TxInput) for item in inputs):
            raise ValueError("`inputs` must hold TxInput values")
        if not all(isinstance(item, TxOutput) for item in outputs):
            raise ValueError("`outputs` must hold TxOutput values")
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "outputs", outputs)
        _unsigned("fee", self.fee, U64_MAX)
        _unsigned("timestamp", self.timestamp, U64_MAX)

    @property
    def size(self) -> int:
        """Number of inputs plus outputs."""
        return len(self.inputs) + len(self.outputs)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary with byte strings as integer arrays."""
        return {
            "hash": list(self.hash),
            "inputs": [item.to_dict() for item in self.inputs],
            "outputs": [item.to_dict() for item in self.outputs],
            "fee": self.fee,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transaction:
        """Build a transaction from the form produced by :meth:`to_dict`."""
        _require(data, ("hash", "inputs", "outputs", "fee", "timestamp"))
        if not isinstance(data["inputs"], list) or not isinstance(data["outputs"], list):
            raise ValueError("`inputs` and `outputs` must be arrays")
        return cls(
            hash=_bytes_from_list("hash", data["hash"]),
            inputs=tuple(TxInput.from_dict(item) for item in data["inputs"]),
            outputs=tuple(TxOutput.from_dict(item) for item in data["outputs"]),
            fee=data["fee"],
            timestamp=data["timestamp"],
        )