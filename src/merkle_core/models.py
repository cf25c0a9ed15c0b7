from __future__ import annotations
from typing import Annotated, List, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from .hashing import B64, B64D, jcs_dumps
from .proof import Proof, ProofElement, Side
from .tree import MerkleTree


def _check_b64(v: str) -> str:
    B64D(v)
    return v


B64Str = Annotated[str, AfterValidator(_check_b64)]


class ProofStep(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    digest_b64: B64Str
    side: Literal["L", "R"]


class InclusionProof(BaseModel):
    """Portable membership proof for one data block.

    Carries everything a holder of ``root_b64`` needs to check the block:
    the leaf digest, the ordered sibling steps and the hash algorithm name.
    """

    model_config = ConfigDict(extra="forbid")

    algorithm: str
    tree_size: int = Field(ge=1, strict=True)
    leaf_digest_b64: B64Str
    root_b64: B64Str
    steps: List[ProofStep] = Field(default_factory=list)

    @classmethod
    def build(cls, tree: MerkleTree, data: bytes) -> "InclusionProof":
        proof = tree.generate_proof(data)
        return cls(
            algorithm=tree.hasher.name,
            tree_size=tree.size,
            leaf_digest_b64=B64(tree.hash(data)),
            root_b64=B64(tree.root_digest),
            steps=[ProofStep(digest_b64=B64(e.digest), side=e.side.label) for e in proof],
        )

    def to_proof(self) -> Proof:
        return [ProofElement(B64D(s.digest_b64), Side.from_label(s.side)) for s in self.steps]


class TreeHead(BaseModel):
    """Commitment summary of a tree: its size and root digest."""

    model_config = ConfigDict(extra="forbid")

    algorithm: str
    tree_size: int = Field(ge=1, strict=True)
    depth: int = Field(ge=0, strict=True)
    root_b64: B64Str

    @classmethod
    def of(cls, tree: MerkleTree) -> "TreeHead":
        return cls(
            algorithm=tree.hasher.name,
            tree_size=tree.size,
            depth=tree.depth,
            root_b64=B64(tree.root_digest),
        )


def canonical_bytes(model: BaseModel) -> bytes:
    return jcs_dumps(model.model_dump())
