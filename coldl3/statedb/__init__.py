"""Persistent key-value state with a Merkle root over committed entries."""