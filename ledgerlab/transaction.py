"""Transactions made of signed inputs and outputs paid to RSA public keys."""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass, field

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from ledgerlab.utxo import UTXO


def _uint32(value: int) -> bytes:
    return struct.pack(">I", value & 0xFFFFFFFF)


def _public_numbers(address: RSAPublicKey):
    return address.public_numbers()


@dataclass
class Input:
    """A reference to an earlier output being spent, with its signature."""

    prev_tx_hash: bytes
    output_index: int
    signature: bytes | None = None

    def __post_init__(self) -> None:
        self.prev_tx_hash = bytes(self.prev_tx_hash)
        if self.signature is not None:
            self.signature = bytes(self.signature)

    def add_signature(self, signature: bytes) -> None:
        """Attach a copy of the signature."""
        self.signature = bytes(signature)


@dataclass(eq=False)
class Output:
    """A value in coins paid to an RSA public key."""

    value: float
    address: RSAPublicKey

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Output):
            return NotImplemented
        return self.value == other.value and _public_numbers(
            self.address
        ) == _public_numbers(other.address)

    __hash__ = None  # type: ignore[assignment]

    def encode(self) -> bytes:
        """Serialise value, public exponent and modulus."""
        numbers = _public_numbers(self.address)
        modulus = numbers.n.to_bytes((numbers.n.bit_length() + 7) // 8, "big")
        return struct.pack(">d", self.value) + _uint32(numbers.e) + modulus


@dataclass(eq=False)
class Transaction:
    """A transaction; its hash is set by :meth:`finalize`."""

    hash: bytes = b""
    inputs: list[Input] = field(default_factory=list)
    outputs: list[Output] = field(default_factory=list)

    def copy(self) -> Transaction:
        """Return a deep copy; outputs keep the same address objects."""
        return Transaction(
            hash=bytes(self.hash),
            inputs=[
                Input(inp.prev_tx_hash, inp.output_index, inp.signature)
                for inp in self.inputs
            ],
            outputs=[Output(out.value, out.address) for out in self.outputs],
        )

    def add_input(self, prev_tx_hash: bytes, output_index: int) -> None:
        self.inputs.append(Input(prev_tx_hash, output_index))

    def add_output(self, value: float, address: RSAPublicKey) -> None:
        self.outputs.append(Output(value, address))

    def remove_input(self, index: int) -> None:
        """Remove the input at ``index``; an out-of-range index is ignored."""
        if 0 <= index < len(self.inputs):
            del self.inputs[index]

    def remove_input_for_utxo(self, utxo: UTXO) -> None:
        """Remove the first input that spends ``utxo``, if any."""
        for position, inp in enumerate(self.inputs):
            if UTXO(inp.prev_tx_hash, inp.output_index) == utxo:
                del self.inputs[position]
                return

    def _encoded_outputs(self) -> bytes:
        return b"".join(out.encode() for out in self.outputs)

    def data_to_sign(self, index: int) -> bytes | None:
        """Bytes to sign for input ``index``, or None past the last input."""
        if index < 0:
            raise IndexError(f"negative input index: {index}")
        if index >= len(self.inputs):
            return None
        inp = self.inputs[index]
        return inp.prev_tx_hash + _uint32(inp.output_index) + self._encoded_outputs()

    def add_signature(self, signature: bytes, index: int) -> None:
        """Sign input ``index``; an out-of-range index is ignored."""
        if 0 <= index < len(self.inputs):
            self.inputs[index].add_signature(signature)

    def raw_data(self) -> bytes:
        """All inputs (with signatures) and outputs, as hashed by finalize."""
        parts = []
        for inp in self.inputs:
            parts.append(inp.prev_tx_hash)
            parts.append(_uint32(inp.output_index))
            if inp.signature is not None:
                parts.append(inp.signature)
        parts.append(self._encoded_outputs())
        return b"".join(parts)

    def finalize(self) -> None:
        """Set the hash to the SHA-256 digest of :meth:`raw_data`."""
        self.hash = hashlib.sha256(self.raw_data()).digest()

    def set_hash(self, value: bytes) -> None:
        self.hash = bytes(value)

    def get_input(self, index: int) -> Input | None:
        if 0 <= index < len(self.inputs):
            return self.inputs[index]
        return None

    def get_output(self, index: int) -> Output | None:
        if 0 <= index < len(self.outputs):
            return self.outputs[index]
        return None

    def key(self) -> str:
        """Hex form of the hash, finalizing first if no hash is set."""
        if not self.hash:
            self.finalize()
        return self.hash.hex()