"""Distributed consensus on transaction sets among trusted and Byzantine nodes."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ConsensusTransaction:
    """A transaction known only by its identifier."""

    id: int


@dataclass(frozen=True)
class Candidate:
    """A transaction proposed to a node by one of its followees."""

    tx: ConsensusTransaction
    sender: int


class TxStatus(Enum):
    """What a node currently believes about a transaction."""

    NONE = 0
    VALID = 1
    INVALID = 2


@dataclass
class Status:
    """A node's belief about a transaction and how often it was confirmed."""

    status: TxStatus = TxStatus.NONE
    confidence: int = 0


class Node(ABC):
    """A participant in the consensus rounds."""

    @abstractmethod
    def set_followees(self, followees: Sequence[bool]) -> None:
        """Record which nodes this node follows, one flag per node index."""

    @abstractmethod
    def set_pending_transactions(
        self, pending_transactions: Iterable[ConsensusTransaction]
    ) -> None:
        """Give the node the transactions it has heard of initially."""

    @abstractmethod
    def send_to_followers(self) -> list[ConsensusTransaction]:
        """Return the transactions this node proposes to its followers."""

    @abstractmethod
    def receive_from_followees(self, candidates: Iterable[Sequence[int]]) -> None:
        """Take ``(transaction id, sender index)`` proposals from followees."""


class ByzantineNode(Node):
    """A node that ignores everything and proposes nothing."""

    def set_followees(self, followees: Sequence[bool]) -> None:
        pass

    def set_pending_transactions(
        self, pending_transactions: Iterable[ConsensusTransaction]
    ) -> None:
        pass

    def send_to_followers(self) -> list[ConsensusTransaction]:
        return []

    def receive_from_followees(self, candidates: Iterable[Sequence[int]]) -> None:
        pass


class TrustedNode(Node):
    """A node that accepts a transaction once enough followees vouch for it.

    Each round at most ``k`` randomly sampled votes per transaction are
    counted; ``alpha`` of them mark it valid, and once it has been valid
    for ``beta`` rounds of confirmation it joins the node's proposals.
    """

    def __init__(self, k: int, alpha: int, beta: int) -> None:
        self.k = k
        self.alpha = alpha
        self.beta = beta
        self._followees: list[bool] = []
        self._local: list[ConsensusTransaction] = []
        self._tx_pool: dict[int, Status] = {}

    def set_followees(self, followees: Sequence[bool]) -> None:
        self._followees = list(followees)

    def set_pending_transactions(
        self, pending_transactions: Iterable[ConsensusTransaction]
    ) -> None:
        for tx in pending_transactions:
            self._local.append(tx)
            self._tx_pool[tx.id] = Status()

    def send_to_followers(self) -> list[ConsensusTransaction]:
        return list(self._local)

    def receive_from_followees(self, candidates: Iterable[Sequence[int]]) -> None:
        proposals = [
            Candidate(ConsensusTransaction(data[0]), data[1]) for data in candidates
        ]

        votes: dict[int, list[int]] = defaultdict(list)
        for candidate in proposals:
            if self._followees[candidate.sender]:
                votes[candidate.tx.id].append(candidate.sender)

        for tx_id, voters in votes.items():
            sample = random.sample(voters, self.k) if len(voters) > self.k else voters
            status = self._tx_pool.setdefault(tx_id, Status())
            if len(sample) >= self.alpha:
                if status.status is TxStatus.VALID:
                    status.confidence += 1
                else:
                    status.status = TxStatus.VALID
                    status.confidence = 1

        known = {tx.id for tx in self._local}
        for tx_id, status in self._tx_pool.items():
            if (
                status.status is TxStatus.VALID
                and status.confidence >= self.beta
                and tx_id not in known
            ):
                self._local.append(ConsensusTransaction(tx_id))
                known.add(tx_id)


def create_byzantine_node(
    p_graph: float, p_byzantine: float, p_tx_distribution: float, num_rounds: int
) -> ByzantineNode:
    """Create a Byzantine node; the simulation parameters are not used."""
    return ByzantineNode()


def create_trusted_node(
    p_graph: float, p_byzantine: float, p_tx_distribution: float, num_rounds: int
) -> TrustedNode:
    """Create a trusted node with thresholds tuned to the simulation parameters."""
    rounds = num_rounds / 10.0
    k = int((p_graph / 0.2) * 12 * rounds)
    alpha = int(0.58 * k * (0.30 / p_byzantine))
    beta = int((p_tx_distribution / 0.05) * 4 * rounds)
    return TrustedNode(k, alpha, beta)