"""A pool mapping unspent outputs to the transaction outputs they hold."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

from ledgerlab.transaction import Output
from ledgerlab.utxo import UTXO


class UTXOPool:
    """The current set of unspent outputs."""

    def __init__(self, pool: UTXOPool | None = None) -> None:
        self._outputs: dict[UTXO, Output] = dict(pool._outputs) if pool else {}

    def copy(self) -> UTXOPool:
        return UTXOPool(self)

    def add_utxo(self, utxo: UTXO, output: Output) -> None:
        """Map ``utxo`` to a copy of ``output``."""
        self._outputs[utxo] = replace(output)

    def remove_utxo(self, utxo: UTXO) -> None:
        """Remove ``utxo``; removing an absent one does nothing."""
        self._outputs.pop(utxo, None)

    def get_tx_output(self, utxo: UTXO) -> Output | None:
        return self._outputs.get(utxo)

    def __contains__(self, utxo: object) -> bool:
        return utxo in self._outputs

    def __len__(self) -> int:
        return len(self._outputs)

    def all_utxos(self) -> list[UTXO]:
        return list(self._outputs)

    def items(self) -> Iterator[tuple[UTXO, Output]]:
        return iter(self._outputs.items())