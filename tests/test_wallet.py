import json

import pytest

from coldl3.encryption.config import EncryptionConfig
from coldl3.encryption.errors import (
    InvalidKeySizeError,
    InvalidPasswordError,
    WalletDecryptionFailedError,
)
from coldl3.encryption.wallet import (
    WalletCacheStats,
    WalletConfig,
    WalletData,
    WalletEncryption,
)


@pytest.fixture
def fast_wallet():
    wallet = WalletEncryption(EncryptionConfig())
    wallet.wallet_config = WalletConfig(iterations=16)
    return wallet


def test_wallet_config_defaults():
    config = WalletConfig()
    assert config.salt_size == 32
    assert config.iterations == 100000
    assert config.memory_cost == 65536


def test_wallet_encryption_creation_keeps_config():
    config = EncryptionConfig()
    wallet = WalletEncryption(config)
    assert wallet.config is config
    assert wallet.wallet_config == WalletConfig()


def test_wallet_encryption_decryption_round_trip():
    wallet = WalletEncryption(EncryptionConfig())
    test_data = b"Hello, World! This is wallet data for encryption."
    password = "password"
    assert wallet.verify_round_trip(test_data, password) is True


def test_wallet_key_generation(fast_wallet):
    key1 = fast_wallet.generate_key()
    key2 = fast_wallet.generate_key()
    assert len(key1) == 32
    assert len(key2) == 32
    assert key1 != key2


def test_wallet_cache_functionality(fast_wallet):
    password = "password"
    key = bytes([1]) * 32
    fast_wallet.cache_key(password, key)
    assert fast_wallet.cached_key(password) == key
    assert fast_wallet.cache_stats() == WalletCacheStats(cached_keys=1, cache_size_bytes=32)
    fast_wallet.clear_cache()
    assert fast_wallet.cache_stats().cached_keys == 0
    assert fast_wallet.cached_key(password) is None


def test_cache_rejects_wrong_key_size(fast_wallet):
    password = "password"
    with pytest.raises(InvalidKeySizeError):
        fast_wallet.cache_key(password, bytes(16))


def test_wallet_empty_password(fast_wallet):
    test_data = b"test data"
    with pytest.raises(InvalidPasswordError):
        fast_wallet.encrypt_data(test_data, "")
    with pytest.raises(InvalidPasswordError):
        fast_wallet.decrypt_data(test_data, "")


def test_wallet_data_validation(fast_wallet):
    password = "password"
    encrypted = fast_wallet.encrypt_data(b"test data", password)
    assert fast_wallet.validate_wallet_data(encrypted) is True
    assert fast_wallet.validate_wallet_data(b"invalid data") is False


def test_envelope_shape(fast_wallet):
    password = "password"
    data = b"test data"
    envelope = WalletData.from_json(fast_wallet.encrypt_data(data, password))
    assert envelope.version == 1
    assert envelope.algorithm == "AEGIS-256X"
    assert len(envelope.salt) == 32
    assert len(envelope.checksum) == 32
    assert len(envelope.encrypted_data) == len(data) + 16


def test_round_trip_with_fast_config(fast_wallet):
    password = "password"
    data = bytes(range(200))
    assert fast_wallet.decrypt_data(fast_wallet.encrypt_data(data, password), password) == data


def test_wrong_password_gives_other_plaintext(fast_wallet):
    password = "password"
    other_password = "secret"
    data = b"wallet contents"
    encrypted = fast_wallet.encrypt_data(data, password)
    wrong = fast_wallet.decrypt_data(encrypted, other_password)
    assert len(wrong) == len(data)
    assert wrong != data
    assert fast_wallet.decrypt_data(encrypted, password) == data


def test_tampered_ciphertext_fails_checksum(fast_wallet):
    password = "password"
    obj = json.loads(fast_wallet.encrypt_data(b"test data", password))
    obj["encrypted_data"][-1] ^= 0xFF
    with pytest.raises(WalletDecryptionFailedError):
        fast_wallet.decrypt_data(json.dumps(obj).encode(), password)


def test_garbage_fails_to_decrypt(fast_wallet):
    password = "password"
    with pytest.raises(WalletDecryptionFailedError):
        fast_wallet.decrypt_data(b"invalid data", password)


def test_missing_field_fails_to_decrypt(fast_wallet):
    password = "password"
    obj = json.loads(fast_wallet.encrypt_data(b"test data", password))
    del obj["checksum"]
    with pytest.raises(WalletDecryptionFailedError):
        fast_wallet.decrypt_data(json.dumps(obj).encode(), password)


def test_validation_rejects_other_version(fast_wallet):
    password = "password"
    obj = json.loads(fast_wallet.encrypt_data(b"test data", password))
    obj["version"] = 2
    assert fast_wallet.validate_wallet_data(json.dumps(obj).encode()) is False


def test_validation_rejects_other_algorithm(fast_wallet):
    password = "password"
    obj = json.loads(fast_wallet.encrypt_data(b"test data", password))
    obj["algorithm"] = "OTHER"
    assert fast_wallet.validate_wallet_data(json.dumps(obj).encode()) is False


def test_validation_follows_salt_size(fast_wallet):
    password = "password"
    encrypted = fast_wallet.encrypt_data(b"test data", password)
    fast_wallet.wallet_config = WalletConfig(salt_size=8, iterations=16)
    assert fast_wallet.validate_wallet_data(encrypted) is False


def test_wallet_data_json_round_trip():
    envelope = WalletData(
        version=1,
        salt=bytes(range(32)),
        encrypted_data=b"\x00\xff" * 10,
        checksum=bytes(32),
        created_at=1234567890,
        algorithm="AEGIS-256X",
    )
    assert WalletData.from_json(envelope.to_json()) == envelope


def test_wallet_data_rejects_out_of_range_bytes():
    text = json.dumps({
        "version": 1,
        "salt": [300],
        "encrypted_data": [],
        "checksum": [],
        "created_at": 0,
        "algorithm": "AEGIS-256X",
    })
    with pytest.raises(ValueError):
        WalletData.from_json(text)