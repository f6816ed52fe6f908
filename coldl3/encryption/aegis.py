"""AEGIS-256X style authenticated-cipher front end with a keystream mock."""

from __future__ import annotations

import logging
import math
import secrets
import time
from dataclasses import dataclass
from itertools import cycle

from coldl3.encryption.errors import (
    InvalidDataFormatError,
    InvalidIVSizeError,
    InvalidKeySizeError,
)

logger = logging.getLogger(__name__)

KEY_SIZE = 32
IV_SIZE = 16


@dataclass(frozen=True)
class AegisBenchmark:
    """Timing results of a benchmark run, in microseconds."""

    data_size: int
    iterations: int
    avg_encryption_time_us: float
    avg_decryption_time_us: float
    min_encryption_time_us: int
    max_encryption_time_us: int
    min_decryption_time_us: int
    max_decryption_time_us: int
    throughput_encryption_mbps: float
    throughput_decryption_mbps: float


def _xor_stream(data: bytes, key: bytes, iv: bytes) -> bytes:
    return bytes(b ^ k ^ v for b, k, v in zip(data, cycle(key), cycle(iv)))


def _throughput(total_bytes: float, avg_us: float) -> float:
    if math.isnan(avg_us):
        return math.nan
    if avg_us == 0:
        return math.inf if total_bytes else math.nan
    return total_bytes / (avg_us / 1_000_000.0)


class Aegis256X:
    """AEGIS-256X cipher; the ciphertext is the IV followed by the payload."""

    def __init__(self) -> None:
        self._key_size = KEY_SIZE
        self._iv_size = IV_SIZE

    @property
    def key_size(self) -> int:
        return self._key_size

    @property
    def iv_size(self) -> int:
        return self._iv_size

    def _check_key(self, key: bytes) -> None:
        if len(key) != self._key_size:
            raise InvalidKeySizeError(self._key_size, len(key))

    def _check_iv(self, iv: bytes) -> None:
        if len(iv) != self._iv_size:
            raise InvalidIVSizeError(self._iv_size, len(iv))

    def generate_iv(self) -> bytes:
        """Return a fresh random IV."""
        return secrets.token_bytes(self._iv_size)

    def encrypt(self, data: bytes, key: bytes) -> bytes:
        """Encrypt ``data`` under ``key`` with a fresh IV prepended."""
        logger.debug("AEGIS-256X encrypting %d bytes", len(data))
        key = bytes(key)
        self._check_key(key)
        iv = self.generate_iv()
        self._check_iv(iv)
        return iv + _xor_stream(bytes(data), key, iv)

    def decrypt(self, data: bytes, key: bytes) -> bytes:
        """Decrypt a ciphertext produced by :meth:`encrypt`."""
        logger.debug("AEGIS-256X decrypting %d bytes", len(data))
        key = bytes(key)
        self._check_key(key)
        data = bytes(data)
        if len(data) < self._iv_size:
            raise InvalidDataFormatError("Data too short")
        iv, payload = data[: self._iv_size], data[self._iv_size :]
        return _xor_stream(payload, key, iv)

    def verify_round_trip(self, data: bytes, key: bytes) -> bool:
        """Encrypt then decrypt ``data`` and report whether it survived."""
        logger.debug("Testing AEGIS-256X round trip")
        return self.decrypt(self.encrypt(data, key), key) == bytes(data)

    def benchmark(self, data_size: int, iterations: int) -> AegisBenchmark:
        """Time ``iterations`` encrypt/decrypt cycles over zeroed data."""
        logger.debug(
            "Running AEGIS-256X benchmark with %d iterations of %d bytes",
            iterations,
            data_size,
        )
        test_data = bytes(data_size)
        key = bytes([1]) * self._key_size
        enc_ns: list[int] = []
        dec_ns: list[int] = []
        for _ in range(iterations):
            start = time.perf_counter_ns()
            encrypted = self.encrypt(test_data, key)
            enc_ns.append(time.perf_counter_ns() - start)

            start = time.perf_counter_ns()
            self.decrypt(encrypted, key)
            dec_ns.append(time.perf_counter_ns() - start)

        def average(samples: list[int]) -> float:
            return sum(samples) / 1000.0 / iterations if iterations else math.nan

        avg_enc = average(enc_ns)
        avg_dec = average(dec_ns)
        total = float(data_size) * float(iterations)
        return AegisBenchmark(
            data_size=data_size,
            iterations=iterations,
            avg_encryption_time_us=avg_enc,
            avg_decryption_time_us=avg_dec,
            min_encryption_time_us=min(enc_ns, default=0) // 1000,
            max_encryption_time_us=max(enc_ns, default=0) // 1000,
            min_decryption_time_us=min(dec_ns, default=0) // 1000,
            max_decryption_time_us=max(dec_ns, default=0) // 1000,
            throughput_encryption_mbps=_throughput(total, avg_enc),
            throughput_decryption_mbps=_throughput(total, avg_dec),
        )