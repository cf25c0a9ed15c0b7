"""Inclusion proof fuzzing with tampered proofs."""
from __future__ import annotations
import atheris
import sys
import random

with atheris.instrument_imports():
    from merkle_core.proof import ProofElement, Side
    from merkle_core.tree import create


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    # Derive variable chunk size & mutation seed
    seed = int.from_bytes(data[:4], "little")
    random.seed(seed)
    chunk_len = 1 + (data[4] % 32)
    body = data[5:]
    blocks = [body[i:i+chunk_len] for i in range(0, min(len(body), chunk_len * 16), chunk_len)]
    # Distinct blocks so a tampered proof cannot coincide with another leaf's path
    blocks = list(dict.fromkeys(b for b in blocks if b))
    if len(blocks) < 3:
        return
    tree = create(blocks)
    target = blocks[seed % len(blocks)]
    proof = tree.generate_proof(target)
    roll = random.random()
    if roll < 0.2:
        sib = proof[0]
        mutated = bytes([sib.digest[0] ^ 0x01]) + sib.digest[1:]
        proof[0] = ProofElement(mutated, sib.side)
        if tree.verify_data(target, proof):
            raise RuntimeError("tampered proof unexpectedly verified")
    elif roll < 0.4:
        el = proof[-1]
        flipped = Side.LEFT if el.side is Side.RIGHT else Side.RIGHT
        proof[-1] = ProofElement(el.digest, flipped)
        if tree.verify_data(target, proof):
            raise RuntimeError("side-flipped proof unexpectedly verified")
    elif not tree.verify_data(target, proof):
        raise RuntimeError("valid proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
