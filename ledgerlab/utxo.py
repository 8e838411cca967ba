"""Unspent transaction outputs identified by transaction hash and output index."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

_KEY_PATTERN = re.compile(r"([0-9a-fA-F]*):([+-]?[0-9]+)")

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def _fnv1a_32(data: bytes) -> int:
    value = _FNV32_OFFSET
    for byte in data:
        value ^= byte
        value = (value * _FNV32_PRIME) & 0xFFFFFFFF
    return value


@total_ordering
@dataclass(frozen=True)
class UTXO:
    """An unspent output: the hash of its transaction and its index there."""

    tx_hash: bytes
    index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "tx_hash", bytes(self.tx_hash))

    def key(self) -> str:
        """Return the text key ``<hex hash>:<index>``."""
        return f"{self.tx_hash.hex()}:{self.index}"

    def hash_code(self) -> int:
        """Combine the index with an FNV-1a hash of the transaction hash."""
        value = 1 * 17 + self.index
        return value * 31 + _fnv1a_32(self.tx_hash)

    def compare_to(self, other: UTXO | None) -> int:
        """Order by index, then hash length, then hash bytes; -1, 0 or 1."""
        if other is None:
            return 1
        if self.index != other.index:
            return -1 if self.index < other.index else 1
        if len(self.tx_hash) != len(other.tx_hash):
            return -1 if len(self.tx_hash) < len(other.tx_hash) else 1
        if self.tx_hash == other.tx_hash:
            return 0
        return -1 if self.tx_hash < other.tx_hash else 1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, UTXO):
            return NotImplemented
        return self.compare_to(other) < 0

    @classmethod
    def from_key(cls, key: str) -> UTXO:
        """Parse a key produced by :meth:`key`; raise ValueError if malformed."""
        match = _KEY_PATTERN.fullmatch(key)
        if match is None:
            raise ValueError(f"invalid UTXO key format: {key!r}")
        hex_hash, index_text = match.groups()
        if len(hex_hash) % 2:
            raise ValueError(f"odd-length hash in UTXO key: {key!r}")
        return cls(bytes.fromhex(hex_hash), int(index_text))