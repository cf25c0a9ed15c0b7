from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class Node:
    """One vertex of the tree.

    Leaves carry ``data`` and no children; internal nodes carry both children
    and no data. ``parent`` is only a navigation aid for proof generation and
    is rewritten on every rebuild.
    """

    digest: bytes
    data: Optional[bytes] = None
    left: Optional["Node"] = field(default=None, repr=False)
    right: Optional["Node"] = field(default=None, repr=False)
    parent: Optional["Node"] = field(default=None, repr=False)

    @classmethod
    def leaf(cls, data: bytes, digest: bytes) -> "Node":
        return cls(digest=digest, data=data)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def sibling(self) -> Optional["Node"]:
        """The other child of this node's parent (itself when duplicated)."""
        if self.parent is None:
            return None
        return self.parent.right if self is self.parent.left else self.parent.left
