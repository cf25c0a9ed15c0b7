"""Fuzz harness for tree construction, mutation and proof round-trips."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from merkle_core.tree import create


def TestOneInput(data: bytes):  # noqa: N802
    if not data:
        return
    # Split data deterministically into blocks (bounded count)
    size = max(1, min(32, data[0]))
    blocks = [data[i : i + size] for i in range(1, min(len(data), 1 + size * 32), size)]
    if not blocks:
        return
    tree = create(blocks)
    if tree.depth != (len(blocks) - 1).bit_length():
        raise RuntimeError("unexpected depth")
    target = blocks[data[-1] % len(blocks)]
    proof = tree.generate_proof(target)
    if not tree.verify_data(target, proof):
        raise RuntimeError("valid inclusion proof failed")
    tree.add_leaf(data[:size])
    if not tree.verify_data(target, tree.generate_proof(target)):
        raise RuntimeError("proof failed after add_leaf")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
