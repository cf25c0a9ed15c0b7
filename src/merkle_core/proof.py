from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import List, Sequence

from .hashing import Hasher
from .node import Node

log = logging.getLogger(__name__)


class Side(enum.IntEnum):
    """Where a sibling digest goes relative to the running hash."""

    LEFT = 0
    RIGHT = 1

    @property
    def label(self) -> str:
        return "L" if self is Side.LEFT else "R"

    @classmethod
    def from_label(cls, label: str) -> "Side":
        if label == "L":
            return cls.LEFT
        if label == "R":
            return cls.RIGHT
        raise ValueError(f"invalid side label: {label!r}")


@dataclass(frozen=True)
class ProofElement:
    digest: bytes
    side: Side


Proof = List[ProofElement]


def generate_proof(leaf: Node) -> Proof:
    """Walk from ``leaf`` to the root collecting sibling digests.

    The recorded side is the sibling's side, i.e. the opposite of the node
    being proved. The root itself is never part of the proof.
    """
    proof: Proof = []
    node = leaf
    while node.parent is not None:
        parent = node.parent
        if node is parent.left:
            proof.append(ProofElement(parent.right.digest, Side.RIGHT))
        else:
            proof.append(ProofElement(parent.left.digest, Side.LEFT))
        node = parent
    return proof


def fold_proof(digest: bytes, proof: Sequence[ProofElement], hasher: Hasher) -> bytes:
    """Replay ``proof`` over ``digest`` leaf-to-root and return the result."""
    h = digest
    for element in proof:
        if element.side == Side.LEFT:
            h = hasher.pair(element.digest, h)
        elif element.side == Side.RIGHT:
            h = hasher.pair(h, element.digest)
        else:
            raise ValueError(f"invalid side: {element.side!r}")
    return h


def verify_proof(
    digest: bytes, proof: Sequence[ProofElement], root_digest: bytes, hasher: Hasher
) -> bool:
    """True when folding ``proof`` over ``digest`` reproduces ``root_digest``.

    Malformed proofs are just another way of not matching the root.
    """
    try:
        folded = bytes(memoryview(fold_proof(digest, proof, hasher)))
    except (TypeError, ValueError, AttributeError) as e:
        log.debug("malformed proof rejected: %s", e)
        return False
    return folded == root_digest
