"""Building blocks for a layer-3 node: encryption, transaction pool, state store and RPC."""

__version__ = "0.1.0"