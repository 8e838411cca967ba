"""Validation and selection of transactions against a UTXO pool."""

from __future__ import annotations

from collections.abc import Iterable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from ledgerlab.transaction import Transaction
from ledgerlab.utxo import UTXO
from ledgerlab.utxo_pool import UTXOPool


def verify_signature(
    message: bytes | None, signature: bytes | None, address: RSAPublicKey
) -> bool:
    """Check a PKCS#1 v1.5 SHA-256 signature of ``message`` by ``address``."""
    if message is None or signature is None:
        return False
    try:
        address.verify(
            bytes(signature), bytes(message), padding.PKCS1v15(), hashes.SHA256()
        )
    except (InvalidSignature, ValueError):
        return False
    return True


def is_valid_transaction(tx: Transaction, pool: UTXOPool) -> bool:
    """Return True if ``tx`` may be applied to ``pool``.

    Every claimed output must be in the pool and signed for by its owner,
    no output may be claimed twice, no output value may be negative, and
    the inputs must cover the outputs.
    """
    claimed: set[UTXO] = set()
    total_in = 0.0
    for index, inp in enumerate(tx.inputs):
        utxo = UTXO(inp.prev_tx_hash, inp.output_index)
        output = pool.get_tx_output(utxo)
        if output is None:
            return False
        if not verify_signature(tx.data_to_sign(index), inp.signature, output.address):
            return False
        if utxo in claimed:
            return False
        claimed.add(utxo)
        total_in += output.value

    if any(out.value < 0 for out in tx.outputs):
        return False
    return total_in >= sum(out.value for out in tx.outputs)


def get_fee(tx: Transaction, pool: UTXOPool) -> float:
    """Inputs minus outputs, or -1 if any input is missing from ``pool``."""
    total_in = 0.0
    for inp in tx.inputs:
        output = pool.get_tx_output(UTXO(inp.prev_tx_hash, inp.output_index))
        if output is None:
            return -1.0
        total_in += output.value
    return total_in - sum(out.value for out in tx.outputs)


def _apply(pool: UTXOPool, tx: Transaction) -> None:
    for inp in tx.inputs:
        pool.remove_utxo(UTXO(inp.prev_tx_hash, inp.output_index))
    for position, output in enumerate(tx.outputs):
        pool.add_utxo(UTXO(tx.hash, position), output)


class TxHandler:
    """A public ledger holding its own copy of the current UTXO pool."""

    def __init__(self, pool: UTXOPool) -> None:
        if pool is None:
            raise ValueError("pool must not be None")
        self._pool = pool.copy()

    @property
    def pool(self) -> UTXOPool:
        """The current UTXO pool."""
        return self._pool

    def is_valid(self, tx: Transaction) -> bool:
        """Validate ``tx`` against the current pool."""
        return is_valid_transaction(tx, self._pool)

    def handle(self, possible_txs: Iterable[Transaction]) -> list[Transaction]:
        """Accept mutually valid transactions in order and update the pool."""
        pool = self._pool.copy()
        accepted: list[Transaction] = []
        for tx in possible_txs:
            if is_valid_transaction(tx, pool):
                accepted.append(tx)
                _apply(pool, tx)
        self._pool = pool
        return accepted

    def max_fee_handle(self, possible_txs: Iterable[Transaction]) -> list[Transaction]:
        """Accept valid transactions with a positive fee, highest fee first."""
        pool = self._pool.copy()
        accepted: list[tuple[float, Transaction]] = []
        for tx in possible_txs:
            fee = get_fee(tx, pool)
            if is_valid_transaction(tx, pool) and fee > 0:
                accepted.append((fee, tx))
                for inp in tx.inputs:
                    pool.remove_utxo(UTXO(inp.prev_tx_hash, inp.output_index))
                tx.finalize()
                for position, output in enumerate(tx.outputs):
                    pool.add_utxo(UTXO(tx.hash, position), output)
        self._pool = pool
        accepted.sort(key=lambda pair: pair[0], reverse=True)
        return [tx for _, tx in accepted]