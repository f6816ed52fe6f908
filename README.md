# coldl3

Building blocks for a layer-3 node, usable on their own as a library.
The package needs nothing beyond the Python standard library.

Install with the test extra to run the test suite:

```
pip install -e ".[test]"
pytest
```

## What is inside

### `coldl3.encryption`

- `aegis.Aegis256X`: a symmetric cipher interface with 32-byte keys and
  16-byte IVs (`key_size`, `iv_size`). `encrypt` draws a fresh IV and returns
  the IV followed by the encrypted payload; `decrypt` reads the IV back from
  the first 16 bytes. It also offers `generate_iv`, `verify_round_trip`, and
  `benchmark(data_size, iterations)`, which returns an `AegisBenchmark` with
  average, minimum and maximum timings in microseconds and throughput figures.
- `wallet.WalletEncryption`: password-based protection of wallet blobs.
  `encrypt_data` derives a key from the password and a random salt, encrypts
  the payload and returns a compact JSON `WalletData` document holding a
  version, the salt, the encrypted bytes, a BLAKE2b checksum, a creation time
  and the algorithm name (byte strings are stored as integer arrays).
  `decrypt_data` checks the checksum before decrypting. An empty password
  raises `InvalidPasswordError`. `validate_wallet_data` returns whether a
  document parses and has version 1, the configured salt size and the
  expected algorithm name. `generate_key` returns a random 32-byte key.
  An in-memory key cache is reached through `cache_key`, `cached_key`,
  `clear_cache` and `cache_stats` (a `WalletCacheStats`).
  `wallet_config` holds a `WalletConfig`; its `salt_size` and `iterations`
  govern the salt length and the number of hashing rounds.
- `config.EncryptionConfig`: engine settings, with `to_dict`, `to_json`,
  `from_dict` and `from_json`.
- `engine.EncryptionEngine`: ties the cipher and wallet encryption together
  and counts encryptions, decryptions and generated keys, with running average
  timings, in `EncryptionStats` (see `stats()`). It has its own
  `verify_round_trip` and `benchmark`, the latter returning an
  `EncryptionBenchmark`.
- `errors`: every failure is a subclass of `EncryptionError`, such as
  `InvalidKeySizeError`, `InvalidDataFormatError` or
  `WalletDecryptionFailedError`. `wrap_exception` maps JSON, base64 and OS
  errors onto them.

### `coldl3.txpool`

- `transaction`: `Transaction`, `TxInput` and `TxOutput` are frozen
  dataclasses that check hash and commitment lengths and integer ranges, and
  convert to and from dictionaries with `to_dict` and `from_dict`.
- `fee`: `SimpleFeeAlgorithm` (base fee times inputs plus outputs),
  `DynamicFeeAlgorithm` (scaled by `congestion_multiplier`) and
  `PriorityFeeAlgorithm` (scaled by a multiplier picked by the transaction's
  fee level, default `1.0, 1.5, 2.0, 3.0, 5.0`). Each clamps its result to
  `min_fee` and `max_fee`.
- `priority`: `SimplePriorityCalculator` (the fee),
  `TimeBasedPriorityCalculator` (decays with age) and
  `MultiFactorPriorityCalculator` (weighs fee, age and size). The time-based
  calculators accept a `clock` callable for testing.
- `pool.TxPool`: a bounded pool. `add_transaction` raises `PoolFullError`
  when full and `InvalidTransactionError` for a zero fee, missing inputs or
  outputs, a duplicate hash, or a fee below what the fee algorithm asks.
  `get_transactions(limit)` returns the highest-priority transactions and
  leaves them in the pool; `remove_transaction` raises
  `TransactionNotFoundError` for an unknown hash. It also has `get`, `stats`
  (a `PoolStats`), `clear`, `transactions_by_fee_range` and
  `transactions_by_address`. `TxPoolConfig` and `TransactionWithMetadata`
  are plain records.
- `errors`: failures are subclasses of `TxPoolError`.

### `coldl3.statedb`

- `merkle.MerkleTrie`: a key-value map whose 32-byte `root` is a BLAKE2b hash
  over every pair in key order; it is all zeros while empty.
- `store.StateStore(path)`: a key-value store kept in an SQLite file inside
  the given directory, usable as a context manager. `put` writes at once and
  remembers the change; `commit(version)` folds remembered changes into the
  trie and returns its root.
- `store.BlockState` records a block's height, root and timestamp;
  `store.CommitmentStorage` stores data under 32-byte commitments.
- `errors`: failures are subclasses of `StateDBError`; `wrap_exception` maps
  SQLite, dbm, JSON and OS errors onto them.

### `coldl3.rpc`

- `server.RPCServer` with `RPCServerConfig`: `self_test`, `node_status`,
  `blockchain_info`, `bridge_status` and `consensus_status` return
  dictionaries and count the request in `RPCServerState`; `stats()` returns
  the `RPCServerStats`.
- `errors.RPCErrorCode` holds the JSON-RPC error codes with their `message`,
  for example `-32601` for "Method not found". Failures are subclasses of
  `RPCError`.

## Example: pricing a transaction

```python
from coldl3.txpool.fee import SimpleFeeAlgorithm
from coldl3.txpool.transaction import Transaction, TxInput, TxOutput

tx = Transaction(
    hash=bytes(32),
    inputs=[TxInput(prev_tx_hash=bytes(32), output_index=0, signature=bytes(64))],
    outputs=[TxOutput(amount=100, address=bytes(32), commitment=bytes(32))],
    fee=10,
    timestamp=1234567890,
)

# Ten per input or output: one input and one output cost 20.
print(SimpleFeeAlgorithm(10).calculate_fee(tx))
```

## What the package does not do

- There is no node program and no command to run; the pieces are a library.
- `RPCServer` opens no sockets. `start` and `stop` only set `running`, and
  the status methods return fixed figures apart from timestamps and uptime.
- There is no peer-to-peer networking, block syncing, consensus or bridge.
- The Merkle root of a `StateStore` lives in memory: it is not saved, and a
  reopened store starts again from an empty trie.

## A note on the cipher

The `Aegis256X` cipher and the wallet key derivation keep the interfaces of
real ones but are stand-ins: the cipher XORs data with the key and IV, and the
key derivation is iterated BLAKE2b. They are not cryptographically secure. Do
not use them to protect real funds or secrets.