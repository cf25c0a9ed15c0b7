from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Union

from .builder import build_tree
from .errors import EmptyInputError, NotFoundError
from .hashing import HashFactory, Hasher, resolve_hasher
from .node import Node
from .proof import Proof, generate_proof, verify_proof

log = logging.getLogger(__name__)

HashFunction = Union[None, str, Hasher, HashFactory]


def _as_bytes(block) -> bytes:
    # memoryview refuses ints, which bytes() would turn into zero-filled buffers
    return bytes(memoryview(block))


@dataclass
class MerkleTree:
    """Binary hash tree over an ordered list of data blocks.

    Every mutation rebuilds all internal nodes from the current leaves, so
    proofs handed out earlier stop verifying once the tree changes. A tree is
    not safe for concurrent mutation; callers serialize writes.
    """

    leaves: List[Node]
    root: Node
    hasher: Hasher = field(repr=False)

    @classmethod
    def from_data(
        cls, blocks: Sequence[bytes], hash_function: HashFunction = None
    ) -> "MerkleTree":
        if isinstance(blocks, (bytes, bytearray, memoryview, str)):
            raise TypeError(
                f"blocks must be a sequence of byte blocks, not {type(blocks).__name__}"
            )
        if not blocks:
            raise EmptyInputError()
        hasher = resolve_hasher(hash_function)
        data = [_as_bytes(b) for b in blocks]
        leaves = [Node.leaf(b, hasher(b)) for b in data]
        tree = cls(leaves, build_tree(leaves, hasher), hasher)
        log.debug("created tree with %d leaves using %s", len(leaves), hasher.name)
        return tree

    @property
    def root_digest(self) -> bytes:
        return self.root.digest

    @property
    def size(self) -> int:
        return len(self.leaves)

    @property
    def depth(self) -> int:
        """Levels above the leaves: ``ceil(log2(size))``."""
        return math.ceil(math.log2(self.size)) if self.size > 1 else 0

    def __len__(self) -> int:
        return len(self.leaves)

    def __contains__(self, data: bytes) -> bool:
        return self._find(data) is not None

    def data_blocks(self) -> Iterator[bytes]:
        for leaf in self.leaves:
            yield leaf.data

    def hash(self, data: bytes) -> bytes:
        return self.hasher(data)

    def _find(self, data: bytes) -> Optional[int]:
        for i, leaf in enumerate(self.leaves):
            if leaf.data == data:
                return i
        return None

    def _rebuild(self) -> None:
        for leaf in self.leaves:
            leaf.parent = None
        self.root = build_tree(self.leaves, self.hasher)

    def generate_proof(self, data: bytes) -> Proof:
        """Proof for the first leaf holding ``data``; raises NotFoundError."""
        idx = self._find(data)
        if idx is None:
            log.warning("proof requested for data not in tree (%d bytes)", len(data))
            raise NotFoundError(data)
        proof = generate_proof(self.leaves[idx])
        log.debug("proof for leaf %d: %d elements", idx, len(proof))
        return proof

    def verify_proof(self, digest: bytes, proof: Proof) -> bool:
        return verify_proof(digest, proof, self.root.digest, self.hasher)

    def verify_data(self, data: bytes, proof: Proof) -> bool:
        return self.verify_proof(self.hasher(data), proof)

    def add_leaf(self, data: bytes) -> None:
        data = _as_bytes(data)
        self.leaves.append(Node.leaf(data, self.hasher(data)))
        self._rebuild()
        log.info("added leaf %d, root now %s", len(self.leaves) - 1, self.root.digest.hex())

    def update_leaf(self, old_data: bytes, new_data: bytes) -> None:
        """Replace the first leaf equal to ``old_data`` and rebuild."""
        idx = self._find(old_data)
        if idx is None:
            log.warning("update requested for data not in tree (%d bytes)", len(old_data))
            raise NotFoundError(old_data)
        new_data = _as_bytes(new_data)
        leaf = self.leaves[idx]
        leaf.data = new_data
        leaf.digest = self.hasher(new_data)
        self._rebuild()
        log.info("updated leaf %d, root now %s", idx, self.root.digest.hex())


def create(blocks: Sequence[bytes], hash_function: HashFunction = None) -> MerkleTree:
    """Build a tree from ``blocks``; ``hash_function`` defaults to settings."""
    return MerkleTree.from_data(blocks, hash_function)
