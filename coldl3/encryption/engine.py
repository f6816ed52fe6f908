"""High-level encryption engine combining the cipher, wallet layer and statistics."""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass, replace

from coldl3.encryption.aegis import Aegis256X
from coldl3.encryption.config import EncryptionConfig
from coldl3.encryption.wallet import WalletEncryption

logger = logging.getLogger(__name__)


@dataclass
class EncryptionStats:
    """Running counters of the engine."""

    total_encryptions: int = 0
    total_decryptions: int = 0
    total_keys_generated: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    average_encryption_time_ms: float = 0.0
    average_decryption_time_ms: float = 0.0


@dataclass(frozen=True)
class EncryptionBenchmark:
    """Timing results of an engine benchmark run, in microseconds."""

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


def _throughput(total_bytes: float, avg_us: float) -> float:
    if math.isnan(avg_us):
        return math.nan
    if avg_us == 0:
        return math.inf if total_bytes else math.nan
    return total_bytes / (avg_us / 1_000_000.0)


def _running_average(previous: float, count: int, sample: float) -> float:
    return (previous * (count - 1) + sample) / count


class EncryptionEngine:
    """Front door for encrypting data and wallets, keeping usage statistics."""

    def __init__(self, config: EncryptionConfig | None = None) -> None:
        self._config = config if config is not None else EncryptionConfig()
        self._aegis = Aegis256X()
        self._wallet = WalletEncryption(replace(self._config))
        self._stats = EncryptionStats()
        self._lock = threading.Lock()

    @property
    def config(self) -> EncryptionConfig:
        return self._config

    def encrypt(self, data: bytes, key: bytes) -> bytes:
        """Encrypt ``data`` under a 32-byte ``key``."""
        logger.debug("Encrypting %d bytes", len(data))
        start = time.perf_counter_ns()
        result = self._aegis.encrypt(data, key)
        elapsed_ms = (time.perf_counter_ns() - start) / 1_000_000.0
        with self._lock:
            self._stats.total_encryptions += 1
            self._stats.average_encryption_time_ms = _running_average(
                self._stats.average_encryption_time_ms,
                self._stats.total_encryptions,
                elapsed_ms,
            )
        return result

    def decrypt(self, data: bytes, key: bytes) -> bytes:
        """Decrypt a ciphertext produced by :meth:`encrypt`."""
        logger.debug("Decrypting %d bytes", len(data))
        start = time.perf_counter_ns()
        result = self._aegis.decrypt(data, key)
        elapsed_ms = (time.perf_counter_ns() - start) / 1_000_000.0
        with self._lock:
            self._stats.total_decryptions += 1
            self._stats.average_decryption_time_ms = _running_average(
                self._stats.average_decryption_time_ms,
                self._stats.total_decryptions,
                elapsed_ms,
            )
        return result

    def generate_key(self) -> bytes:
        """Return a fresh random 32-byte key."""
        logger.debug("Generating new encryption key")
        key = self._wallet.generate_key()
        with self._lock:
            self._stats.total_keys_generated += 1
        return key

    def encrypt_wallet_data(self, data: bytes, password: str) -> bytes:
        """Encrypt wallet contents under ``password``."""
        logger.debug("Encrypting wallet data")
        return self._wallet.encrypt_data(data, password)

    def decrypt_wallet_data(self, data: bytes, password: str) -> bytes:
        """Decrypt a wallet envelope with ``password``."""
        logger.debug("Decrypting wallet data")
        return self._wallet.decrypt_data(data, password)

    def stats(self) -> EncryptionStats:
        """Return a snapshot of the statistics."""
        with self._lock:
            return replace(self._stats)

    def verify_round_trip(self, data: bytes) -> bool:
        """Encrypt and decrypt ``data`` under a new key; report whether it survived."""
        logger.debug("Testing encryption/decryption round trip")
        key = self.generate_key()
        return self.decrypt(self.encrypt(data, key), key) == bytes(data)

    def benchmark(self, data_size: int, iterations: int) -> EncryptionBenchmark:
        """Time ``iterations`` encrypt/decrypt cycles over zeroed data."""
        logger.debug(
            "Running encryption benchmark with %d iterations of %d bytes",
            iterations,
            data_size,
        )
        test_data = bytes(data_size)
        key = self.generate_key()
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
        return EncryptionBenchmark(
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