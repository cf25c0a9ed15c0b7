from __future__ import annotations
import json
import pathlib
from typing import List, Optional

import typer
from rich import print

from merkle_core.errors import MerkleError
from merkle_core.hashing import B64D
from merkle_core.logutil import setup_logging
from merkle_core.models import InclusionProof, TreeHead, canonical_bytes
from merkle_core.settings import settings
from merkle_core.tree import MerkleTree, create
from merkle_sdk.verify import verify_proof_document

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
):
    setup_logging(log_level)


def _read_block(path: pathlib.Path) -> bytes:
    if not path.is_file():
        print(f"[red]Not a file: {path}[/red]")
        raise typer.Exit(code=1)
    size = path.stat().st_size
    if size > settings.max_block_bytes:
        print(f"[red]{path} is {size} bytes; limit is {settings.max_block_bytes}[/red]")
        raise typer.Exit(code=1)
    return path.read_bytes()


def _build(files: List[pathlib.Path], algorithm: str) -> MerkleTree:
    blocks = [_read_block(p) for p in files]
    try:
        return create(blocks, algorithm)
    except MerkleError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def root(
    files: List[pathlib.Path] = typer.Argument(..., help="Data blocks, one file each"),
    algorithm: str = typer.Option(settings.hash_algorithm, help="hashlib algorithm name"),
):
    """Print the tree head (size, depth and root) over the given files as JSON."""
    tree = _build(files, algorithm)
    typer.echo(canonical_bytes(TreeHead.of(tree)).decode("utf-8"))


@app.command()
def prove(
    files: List[pathlib.Path] = typer.Argument(..., help="Data blocks, one file each"),
    target: pathlib.Path = typer.Option(..., help="File whose contents to prove"),
    out: Optional[pathlib.Path] = typer.Option(None, help="Write proof JSON here"),
    algorithm: str = typer.Option(settings.hash_algorithm, help="hashlib algorithm name"),
):
    """Emit an inclusion proof for TARGET against the tree over FILES."""
    tree = _build(files, algorithm)
    try:
        doc = InclusionProof.build(tree, _read_block(target))
    except MerkleError as e:
        print(f"[red]{target.name}: {e}[/red]")
        raise typer.Exit(code=1)
    body = canonical_bytes(doc)
    if out is None:
        typer.echo(body.decode("utf-8"))
        return
    out.write_bytes(body)
    print(f"[green]Wrote proof ({len(doc.steps)} steps) to {out}[/green]")


@app.command()
def verify(
    proof_path: pathlib.Path = typer.Argument(..., help="Proof JSON from `prove`"),
    root: str = typer.Option(..., "--root", help="Trusted root digest (base64)"),
    data: Optional[pathlib.Path] = typer.Option(None, help="Also check this file is the proved block"),
):
    """Check an inclusion proof against a root obtained independently of it."""
    try:
        trusted_root = B64D(root)
    except ValueError as e:
        print(f"[red]--root: {e}[/red]")
        raise typer.Exit(code=1)
    try:
        doc = json.loads(proof_path.read_text())
    except (OSError, ValueError) as e:
        print(f"[red]Cannot read proof: {e}[/red]")
        raise typer.Exit(code=1)
    block = _read_block(data) if data is not None else None
    ok = verify_proof_document(doc, trusted_root, block)
    print({"proof_valid": ok})
    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
