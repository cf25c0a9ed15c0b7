import logging
from typing import Any, Dict, Iterable, Optional

from merkle_core.hashing import B64D, resolve_hasher
from merkle_core.models import InclusionProof, TreeHead
from merkle_core.proof import Proof, verify_proof
from merkle_core.tree import HashFunction, create

log = logging.getLogger(__name__)


def verify_inclusion(
    leaf_digest: bytes, proof: Proof, root: bytes, hash_function: HashFunction = None
) -> bool:
    """Check a proof against a bare root digest, without holding the tree."""
    return verify_proof(leaf_digest, proof, root, resolve_hasher(hash_function))


def verify_data(
    data: bytes, proof: Proof, root: bytes, hash_function: HashFunction = None
) -> bool:
    hasher = resolve_hasher(hash_function)
    return verify_proof(hasher(data), proof, root, hasher)


def verify_proof_document(
    doc: Dict[str, Any], root: bytes, data: Optional[bytes] = None
) -> bool:
    """Return True if an exported inclusion proof folds to the trusted ``root``.

    The root the document carries is never trusted on its own: it must equal
    ``root``. When ``data`` is given the document's leaf digest must also be
    the hash of ``data``. Unparseable documents and unknown algorithms verify
    as False.
    """
    try:
        ip = InclusionProof.model_validate(doc)
        hasher = resolve_hasher(ip.algorithm)
        leaf = B64D(ip.leaf_digest_b64)
        stated_root = B64D(ip.root_b64)
        proof = ip.to_proof()
    except Exception as e:
        log.debug("rejecting proof document: %s", e)
        return False
    if stated_root != root:
        return False
    if data is not None and hasher(data) != leaf:
        return False
    return verify_proof(leaf, proof, root, hasher)


def verify_tree_head(head: Dict[str, Any], blocks: Iterable[bytes]) -> bool:
    """Recompute the root over ``blocks`` and compare with a tree head."""
    try:
        th = TreeHead.model_validate(head)
        expected = B64D(th.root_b64)
        tree = create(list(blocks), th.algorithm)
    except Exception as e:
        log.debug("rejecting tree head: %s", e)
        return False
    return (
        tree.size == th.tree_size
        and tree.depth == th.depth
        and tree.root_digest == expected
    )
