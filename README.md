# ledgerlab

A small library for experimenting with the mechanics of a UTXO-based ledger.
It covers three areas: building and signing transactions, validating them
against a pool of unspent outputs, and simulating trust-based agreement on a
set of transactions among many nodes.

## Modules

### `ledgerlab.utxo`

`UTXO(tx_hash, index)` is a frozen dataclass that names one output of a
transaction. It can be hashed and ordered.

- `key()` returns `"<hex hash>:<index>"`.
- `UTXO.from_key(key)` parses such a key back into a `UTXO`. It raises
  `ValueError` if the key is malformed.
- `compare_to(other)` returns -1, 0 or 1. It compares the index first, then
  the hash length, then the hash bytes. A `None` argument compares as smaller.
- `hash_code()` combines the index with an FNV-1a hash of the transaction hash.

### `ledgerlab.transaction`

- `Input(prev_tx_hash, output_index, signature=None)` spends an earlier output.
  `add_signature(signature)` attaches a signature to it.
- `Output(value, address)` pays `value` coins to an RSA public key from
  `cryptography`. Two outputs are equal when their values and public numbers
  are equal. `encode()` serialises the value, the public exponent and the
  modulus.
- `Transaction` holds `hash`, `inputs` and `outputs`. Its methods are:
  - `add_input`, `add_output`;
  - `remove_input(index)` and `remove_input_for_utxo(utxo)`, which ignore an
    index or UTXO that is not present;
  - `add_signature(signature, index)`;
  - `get_input(index)` and `get_output(index)`, which return `None` when out
    of range;
  - `data_to_sign(index)`: the bytes an input's owner signs. It returns `None`
    past the last input and raises `IndexError` for a negative index;
  - `raw_data()`: every input with its signature, followed by every output;
  - `finalize()`: sets `hash` to the SHA-256 digest of `raw_data()`;
  - `set_hash(value)`;
  - `key()`: the hex form of the hash. If no hash is set yet, it finalizes
    the transaction first;
  - `copy()`: a deep copy of the transaction.

### `ledgerlab.utxo_pool`

`UTXOPool(pool=None)` maps each `UTXO` to its `Output`. If you pass another
pool, the new pool starts as a copy of it. The pool provides:

- `add_utxo(utxo, output)`, which stores a copy of the output;
- `remove_utxo(utxo)`, which does nothing if the UTXO is absent;
- `get_tx_output(utxo)`, which returns `None` if the UTXO is absent;
- `utxo in pool` and `len(pool)`;
- `all_utxos()`, `items()` and `copy()`.

### `ledgerlab.tx_handler`

- `verify_signature(message, signature, address)` checks an RSA PKCS#1 v1.5
  signature over SHA-256. It returns `False` rather than raising.
- `is_valid_transaction(tx, pool)` is true when all of these hold:
  - every claimed output is in the pool;
  - every input is correctly signed by the owner of the output it spends;
  - no output is claimed twice;
  - no output value is negative;
  - the inputs cover the outputs.
- `get_fee(tx, pool)` returns inputs minus outputs, or `-1.0` if an input is
  not in the pool.
- `TxHandler(pool)` keeps its own copy of the pool, exposed as `pool`. Passing
  `None` raises `ValueError`. It provides:
  - `is_valid(tx)`: validates `tx` against the current pool;
  - `handle(possible_txs)`: accepts transactions in the given order when each
    is valid against the pool as updated by those accepted before it. It then
    replaces the pool with the result. New outputs are keyed by each
    transaction's current `hash`.
  - `max_fee_handle(possible_txs)`: works the same way, but accepts only
    transactions with a positive fee. It finalizes each accepted transaction
    and returns them sorted by fee, highest first.

### `ledgerlab.consensus`

- `ConsensusTransaction(id)` is a transaction known only by its identifier.
- `Candidate(tx, sender)` is one proposal.
- `Status` holds a `TxStatus` (`NONE`, `VALID`, `INVALID`) and a confidence
  count.
- `Node` is the abstract interface, with four methods:
  - `set_followees(followees)`;
  - `set_pending_transactions(txs)`;
  - `send_to_followers()`;
  - `receive_from_followees(candidates)`, where each candidate is a
    `(transaction id, sender index)` pair.
- `ByzantineNode` ignores everything and proposes nothing.
- `TrustedNode(k, alpha, beta)` counts at most `k` randomly sampled votes per
  transaction from the nodes it follows. When a transaction gets at least
  `alpha` of them, it is marked valid, or its confidence rises if it was
  already valid. Once its confidence reaches `beta`, the transaction joins the
  node's proposals.
- `create_trusted_node(p_graph, p_byzantine, p_tx_distribution, num_rounds)`
  derives `k`, `alpha` and `beta` from the simulation parameters.
- `create_byzantine_node(...)` takes the same parameters and ignores them.

## Installation

```
pip install .
```

## Example

```python
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ledgerlab.transaction import Transaction
from ledgerlab.utxo import UTXO
from ledgerlab.utxo_pool import UTXOPool
from ledgerlab.tx_handler import TxHandler

alice = rsa.generate_private_key(public_exponent=65537, key_size=1024)
bob = rsa.generate_private_key(public_exponent=65537, key_size=1024)

genesis = Transaction()
genesis.add_output(10.0, alice.public_key())
genesis.finalize()

pool = UTXOPool()
pool.add_utxo(UTXO(genesis.hash, 0), genesis.get_output(0))

tx = Transaction()
tx.add_input(genesis.hash, 0)
tx.add_output(7.0, bob.public_key())
signature = alice.sign(tx.data_to_sign(0), padding.PKCS1v15(), hashes.SHA256())
tx.add_signature(signature, 0)
tx.finalize()

handler = TxHandler(pool)
assert handler.is_valid(tx)
accepted = handler.max_fee_handle([tx])   # fee of 3.0, so it is accepted
assert accepted == [tx]
assert UTXO(tx.hash, 0) in handler.pool
```

The caller drives a consensus simulation:

1. Create nodes with `create_trusted_node` or `create_byzantine_node`.
2. Tell each node whom it follows with `set_followees`.
3. Seed each node with `set_pending_transactions`.
4. In each round, collect `send_to_followers()` from every node and pass each
   follower the resulting `(transaction id, sender index)` pairs through
   `receive_from_followees`.

## What it does not do

The package is a library only. It has no command-line program and no
graphical interface. It does not form transactions into blocks or chains, and
it stores nothing on disk. Nodes in the consensus simulation exchange
proposals only through the calls you make, never over a network.

## Tests

```
pip install ".[test]"
pytest
```