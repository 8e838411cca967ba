"""UTXO transactions and pools, transaction validation and fee-ordered handling, and a trust-based consensus simulation."""

__version__ = "0.1.0"