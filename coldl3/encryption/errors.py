"""Exceptions raised by the encryption layer."""

from __future__ import annotations

import binascii
import json


class EncryptionError(Exception):
    """Base class for every encryption failure."""

    label = "Encryption error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(f"{self.label}: {detail}")


class _SizeMismatchError(EncryptionError):
    what = ""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        self.detail = f"expected {expected}, got {actual}"
        Exception.__init__(self, f"Invalid {self.what} size: {self.detail}")


class InvalidKeySizeError(_SizeMismatchError):
    what = "key"


class InvalidIVSizeError(_SizeMismatchError):
    what = "IV"


class EncryptionFailedError(EncryptionError):
    label = "Encryption failed"


class DecryptionFailedError(EncryptionError):
    label = "Decryption failed"


class KeyGenerationFailedError(EncryptionError):
    label = "Key generation failed"


class InvalidPasswordError(EncryptionError):
    label = "Invalid password"


class WalletEncryptionFailedError(EncryptionError):
    label = "Wallet encryption failed"


class WalletDecryptionFailedError(EncryptionError):
    label = "Wallet decryption failed"


class InvalidDataFormatError(EncryptionError):
    label = "Invalid data format"


class HardwareAccelerationNotAvailableError(EncryptionError):
    label = "Hardware acceleration not available"


class CacheError(EncryptionError):
    label = "Cache error"


class ConfigError(EncryptionError):
    label = "Configuration error"


class InternalError(EncryptionError):
    label = "Internal error"


class MemoryAllocationFailedError(EncryptionError):
    label = "Memory allocation failed"


class BufferOverflowError(EncryptionError):
    label = "Buffer overflow"


class InvalidAlgorithmError(EncryptionError):
    label = "Invalid algorithm"


def wrap_exception(exc: BaseException) -> EncryptionError:
    """Map a foreign exception onto the matching EncryptionError."""
    if isinstance(exc, EncryptionError):
        return exc
    if isinstance(exc, json.JSONDecodeError):
        return InvalidDataFormatError(str(exc))
    if isinstance(exc, binascii.Error):
        return InvalidDataFormatError(f"Base64 decode error: {exc}")
    if isinstance(exc, OSError):
        return InternalError(str(exc))
    return InternalError(str(exc))