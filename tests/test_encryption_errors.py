import base64
import binascii
import json

import pytest

from coldl3.encryption.errors import (
    EncryptionError,
    InternalError,
    InvalidDataFormatError,
    InvalidIVSizeError,
    InvalidKeySizeError,
    InvalidPasswordError,
    WalletDecryptionFailedError,
    wrap_exception,
)


def test_encryption_error_display():
    error = InvalidKeySizeError(32, 16)
    text = str(error)
    assert "Invalid key size" in text
    assert "32" in text
    assert "16" in text
    assert text == "Invalid key size: expected 32, got 16"
    assert error.expected == 32
    assert error.actual == 16


def test_iv_size_display():
    assert str(InvalidIVSizeError(16, 8)) == "Invalid IV size: expected 16, got 8"


@pytest.mark.parametrize(
    "cls, message",
    [
        (InvalidPasswordError, "Invalid password: Password cannot be empty"),
        (WalletDecryptionFailedError, "Wallet decryption failed: Password cannot be empty"),
        (InternalError, "Internal error: Password cannot be empty"),
    ],
)
def test_labelled_messages(cls, message):
    error = cls("Password cannot be empty")
    assert str(error) == message
    assert isinstance(error, EncryptionError)


def test_encryption_error_from_io_error():
    wrapped = wrap_exception(FileNotFoundError(2, "File not found"))
    assert isinstance(wrapped, InternalError)
    assert "File not found" in wrapped.detail


def test_encryption_error_from_json_error():
    with pytest.raises(json.JSONDecodeError) as info:
        json.loads("{ invalid json }")
    wrapped = wrap_exception(info.value)
    assert isinstance(wrapped, InvalidDataFormatError)
    assert "Expecting" in wrapped.detail


def test_encryption_error_from_base64_error():
    with pytest.raises(binascii.Error) as info:
        base64.b64decode("abc", validate=True)
    wrapped = wrap_exception(info.value)
    assert isinstance(wrapped, InvalidDataFormatError)
    assert wrapped.detail.startswith("Base64 decode error: ")


def test_wrap_passes_encryption_errors_through():
    original = InvalidPasswordError("bad")
    assert wrap_exception(original) is original


def test_wrap_other_errors_as_internal():
    wrapped = wrap_exception(RuntimeError("boom"))
    assert isinstance(wrapped, InternalError)
    assert str(wrapped) == "Internal error: boom"