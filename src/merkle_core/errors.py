from __future__ import annotations
from typing import Optional


class MerkleError(Exception):
    """Base class for structural failures raised by the tree."""


class EmptyInputError(MerkleError, ValueError):
    def __init__(self, message: str = "data cannot be empty"):
        super().__init__(message)


class NotFoundError(MerkleError, LookupError):
    """No leaf carries the requested data; the tree was left untouched."""

    def __init__(self, data: Optional[bytes] = None):
        self.data = data
        super().__init__("data not found in the tree")


class HashConfigError(MerkleError, ValueError):
    """The configured hash function cannot produce digests."""
