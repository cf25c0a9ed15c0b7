from __future__ import annotations
import base64
import functools
import hashlib
from typing import Any, Callable, Optional, Union

import rfc8785

from .errors import HashConfigError
from .settings import settings

# A hashlib-style constructor: each call returns a fresh object exposing
# update(bytes) and digest() -> bytes.
HashFactory = Callable[[], Any]


def B64(b: bytes) -> str:
    """Base64-encode bytes to ASCII string."""
    return base64.b64encode(b).decode("ascii")


def B64D(s: str) -> bytes:
    """Decode base64 ASCII string to bytes with strict validation."""
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except Exception as e:
        raise ValueError("invalid base64") from e


def jcs_dumps(obj) -> bytes:
    """Deterministic canonical JSON bytes per RFC8785."""
    return rfc8785.dumps(obj)


class Hasher:
    """Pure ``bytes -> bytes`` view over a hash factory.

    Every call starts from a fresh hash object, so no state leaks between
    digests.
    """

    def __init__(self, factory: HashFactory, name: Optional[str] = None):
        self.factory = factory
        self.name = name or _factory_name(factory)

    def __call__(self, data: bytes) -> bytes:
        h = self.factory()
        h.update(data)
        return h.digest()

    def pair(self, left: bytes, right: bytes) -> bytes:
        return self(left + right)

    def __repr__(self) -> str:
        return f"Hasher({self.name!r})"


def _factory_name(factory: HashFactory) -> str:
    for attr in ("name", "__name__"):
        name = getattr(factory, attr, None)
        if isinstance(name, str):
            # hashlib exposes constructors as openssl_sha256
            return name[len("openssl_"):] if name.startswith("openssl_") else name
    return type(factory).__name__


def _named_factory(name: str) -> Hasher:
    base = name.strip().lower()
    # accept "sha3-256" as well as "sha3_256", and "sha-512" as "sha512"
    for candidate in dict.fromkeys((base, base.replace("-", "_"), base.replace("-", ""))):
        try:
            hashlib.new(candidate)
        except (ValueError, TypeError):
            continue
        return Hasher(functools.partial(hashlib.new, candidate), candidate)
    raise HashConfigError(f"unsupported hash algorithm: {name}")


def resolve_hasher(hash_function: Union[None, str, Hasher, HashFactory] = None) -> Hasher:
    """Turn the tree's hash configuration into a usable :class:`Hasher`.

    Accepts ``None`` (configured default), a hashlib algorithm name, a
    ready ``Hasher`` or a hashlib-style factory. The result is probed once so
    that a broken primitive fails here rather than on every digest.
    """
    if hash_function is None:
        hash_function = settings.hash_algorithm
    if isinstance(hash_function, Hasher):
        hasher = hash_function
    elif isinstance(hash_function, str):
        hasher = _named_factory(hash_function)
    elif callable(hash_function):
        hasher = Hasher(hash_function)
    else:
        raise HashConfigError(f"not a hash function: {hash_function!r}")

    try:
        probe = hasher(b"")
    except Exception as e:
        raise HashConfigError(f"hash function {hasher.name!r} failed: {e}") from e
    if not isinstance(probe, bytes) or not probe:
        raise HashConfigError(f"hash function {hasher.name!r} must return non-empty bytes")
    return hasher
