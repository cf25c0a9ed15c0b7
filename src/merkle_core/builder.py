from __future__ import annotations
import logging
from typing import List, Sequence

from .errors import EmptyInputError
from .hashing import Hasher
from .node import Node

log = logging.getLogger(__name__)


def build_tree(nodes: Sequence[Node], hasher: Hasher) -> Node:
    """Pair ``nodes`` level by level and return the root.

    An odd node out is paired with itself, so its parent digest is
    ``H(d || d)``. Parent links of every node below the root are (re)set.
    """
    if not nodes:
        raise EmptyInputError("no leaves")
    lvl: List[Node] = list(nodes)
    levels = 0
    while len(lvl) > 1:
        nxt = []
        for i in range(0, len(lvl), 2):
            left = lvl[i]
            right = lvl[i + 1] if i + 1 < len(lvl) else lvl[i]  # duplicate last if odd
            parent = Node(
                digest=hasher.pair(left.digest, right.digest), left=left, right=right
            )
            left.parent = parent
            right.parent = parent
            nxt.append(parent)
        lvl = nxt
        levels += 1
    log.debug("built tree: %d leaves, %d levels, root %s", len(nodes), levels, lvl[0].digest.hex())
    return lvl[0]
