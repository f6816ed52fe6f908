"""Password-based encryption of wallet data."""

from __future__ import annotations

import hashlib
import json
import logging
import secrets
import threading
import time
from dataclasses import asdict, dataclass, field
from itertools import cycle
from typing import Any

from coldl3.encryption.config import EncryptionConfig
from coldl3.encryption.errors import (
    InvalidDataFormatError,
    InvalidKeySizeError,
    InvalidPasswordError,
    WalletDecryptionFailedError,
    WalletEncryptionFailedError,
)

logger = logging.getLogger(__name__)

WALLET_VERSION = 1
WALLET_ALGORITHM = "AEGIS-256X"
KEY_SIZE = 32
IV_SIZE = 16


@dataclass
class WalletConfig:
    """Key-derivation parameters for wallet encryption."""

    salt_size: int = 32
    iterations: int = 100000
    memory_cost: int = 65536
    parallelism: int = 4
    output_length: int = 32


def _unsigned(value: Any, name: str, bits: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"`{name}` must be an integer")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"`{name}` out of range")
    return value


def _byte_list(value: Any, name: str) -> bytes:
    if not isinstance(value, list):
        raise ValueError(f"`{name}` must be an array of bytes")
    return bytes(_unsigned(item, name, 8) for item in value)


@dataclass
class WalletData:
    """Serialised envelope of an encrypted wallet."""

    version: int
    salt: bytes
    encrypted_data: bytes
    checksum: bytes
    created_at: int
    algorithm: str

    def to_json(self) -> bytes:
        """Serialise to compact JSON with byte strings as integer arrays."""
        return json.dumps(
            {
                "version": self.version,
                "salt": list(self.salt),
                "encrypted_data": list(self.encrypted_data),
                "checksum": list(self.checksum),
                "created_at": self.created_at,
                "algorithm": self.algorithm,
            },
            separators=(",", ":"),
        ).encode()

    @classmethod
    def from_json(cls, data: bytes | str) -> WalletData:
        """Parse an envelope; raises ValueError on malformed input."""
        obj = json.loads(data)
        if not isinstance(obj, dict):
            raise ValueError("expected an object")
        missing = [
            name
            for name in ("version", "salt", "encrypted_data", "checksum", "created_at", "algorithm")
            if name not in obj
        ]
        if missing:
            raise ValueError(f"missing field `{missing[0]}`")
        if not isinstance(obj["algorithm"], str):
            raise ValueError("`algorithm` must be a string")
        return cls(
            version=_unsigned(obj["version"], "version", 32),
            salt=_byte_list(obj["salt"], "salt"),
            encrypted_data=_byte_list(obj["encrypted_data"], "encrypted_data"),
            checksum=_byte_list(obj["checksum"], "checksum"),
            created_at=_unsigned(obj["created_at"], "created_at", 64),
            algorithm=obj["algorithm"],
        )


@dataclass(frozen=True)
class WalletCacheStats:
    """Size of the key cache."""

    cached_keys: int
    cache_size_bytes: int


def _xor_stream(data: bytes, key: bytes, iv: bytes) -> bytes:
    return bytes(b ^ k ^ v for b, k, v in zip(data, cycle(key), cycle(iv)))


def _checksum(data: bytes) -> bytes:
    return hashlib.blake2b(data).digest()[:32]


class WalletEncryption:
    """Encrypts wallet contents under a key derived from a password."""

    def __init__(self, config: EncryptionConfig | None = None) -> None:
        self._config = config if config is not None else EncryptionConfig()
        self._wallet_config = WalletConfig()
        self._key_cache: dict[str, bytes] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> EncryptionConfig:
        return self._config

    @property
    def wallet_config(self) -> WalletConfig:
        return self._wallet_config

    @wallet_config.setter
    def wallet_config(self, value: WalletConfig) -> None:
        self._wallet_config = value

    def generate_key(self) -> bytes:
        """Return a fresh random 32-byte key."""
        logger.debug("Generating new wallet encryption key")
        return secrets.token_bytes(KEY_SIZE)

    def _derive_key(self, password: str, salt: bytes) -> bytes:
        digest = hashlib.blake2b(password.encode() + salt).digest()
        for _ in range(self._wallet_config.iterations):
            digest = hashlib.blake2b(digest).digest()
        return digest[:KEY_SIZE]

    @staticmethod
    def _require_password(password: str) -> None:
        if not password:
            raise InvalidPasswordError("Password cannot be empty")

    def encrypt_data(self, data: bytes, password: str) -> bytes:
        """Encrypt ``data`` and return the JSON wallet envelope."""
        logger.debug("Encrypting wallet data")
        self._require_password(password)
        salt = secrets.token_bytes(self._wallet_config.salt_size)
        key = self._derive_key(password, salt)
        iv = secrets.token_bytes(IV_SIZE)
        encrypted = iv + _xor_stream(bytes(data), key, iv)
        envelope = WalletData(
            version=WALLET_VERSION,
            salt=salt,
            encrypted_data=encrypted,
            checksum=_checksum(encrypted),
            created_at=int(time.time()),
            algorithm=WALLET_ALGORITHM,
        )
        try:
            return envelope.to_json()
        except (TypeError, ValueError) as exc:
            raise WalletEncryptionFailedError(str(exc)) from exc

    def decrypt_data(self, data: bytes, password: str) -> bytes:
        """Decrypt a JSON wallet envelope made by :meth:`encrypt_data`."""
        logger.debug("Decrypting wallet data")
        self._require_password(password)
        try:
            envelope = WalletData.from_json(data)
        except (ValueError, UnicodeDecodeError) as exc:
            raise WalletDecryptionFailedError(str(exc)) from exc
        if _checksum(envelope.encrypted_data) != envelope.checksum:
            raise WalletDecryptionFailedError("Checksum verification failed")
        key = self._derive_key(password, envelope.salt)
        payload = envelope.encrypted_data
        if len(payload) < IV_SIZE:
            raise InvalidDataFormatError("Data too short")
        return _xor_stream(payload[IV_SIZE:], key, payload[:IV_SIZE])

    def cache_key(self, password: str, key: bytes) -> None:
        """Remember ``key`` for ``password``."""
        key = bytes(key)
        if len(key) != KEY_SIZE:
            raise InvalidKeySizeError(KEY_SIZE, len(key))
        with self._lock:
            self._key_cache[password] = key

    def cached_key(self, password: str) -> bytes | None:
        """Return the key cached for ``password``, if any."""
        with self._lock:
            return self._key_cache.get(password)

    def clear_cache(self) -> None:
        """Forget every cached key."""
        with self._lock:
            self._key_cache.clear()

    def cache_stats(self) -> WalletCacheStats:
        """Report how many keys are cached and their total size."""
        with self._lock:
            count = len(self._key_cache)
        return WalletCacheStats(cached_keys=count, cache_size_bytes=count * KEY_SIZE)

    def verify_round_trip(self, data: bytes, password: str) -> bool:
        """Encrypt then decrypt ``data`` and report whether it survived."""
        logger.debug("Testing wallet encryption/decryption round trip")
        return self.decrypt_data(self.encrypt_data(data, password), password) == bytes(data)

    def validate_wallet_data(self, data: bytes) -> bool:
        """Check that ``data`` is a well-formed envelope this wallet accepts."""
        try:
            envelope = WalletData.from_json(data)
        except (ValueError, UnicodeDecodeError):
            return False
        return (
            envelope.version == WALLET_VERSION
            and len(envelope.salt) == self._wallet_config.salt_size
            and envelope.algorithm == WALLET_ALGORITHM
        )