import json

from typer.testing import CliRunner

from merkle_cli.__main__ import app
from merkle_core.hashing import B64
from merkle_core.models import InclusionProof, canonical_bytes
from merkle_core.tree import create

runner = CliRunner()


def _files(tmp_path, n=5):
    paths = []
    for i in range(n):
        p = tmp_path / f"block-{i}.txt"
        p.write_bytes(f"contents {i}".encode())
        paths.append(p)
    return paths


def test_root(tmp_path):
    paths = _files(tmp_path, 3)
    r = runner.invoke(app, ["root", *map(str, paths)])
    assert r.exit_code == 0, r.output
    expected = create([p.read_bytes() for p in paths])
    head = json.loads(r.stdout)
    assert head == {
        "algorithm": "sha256",
        "depth": 2,
        "root_b64": B64(expected.root_digest),
        "tree_size": 3,
    }


def test_prove_and_verify(tmp_path):
    paths = _files(tmp_path)
    out = tmp_path / "proof.json"
    r = runner.invoke(
        app, ["prove", *map(str, paths), "--target", str(paths[3]), "--out", str(out)]
    )
    assert r.exit_code == 0, r.output
    doc = json.loads(out.read_text())
    assert doc["tree_size"] == 5 and len(doc["steps"]) == 3
    root = B64(create([p.read_bytes() for p in paths]).root_digest)

    r = runner.invoke(app, ["verify", str(out), "--root", root, "--data", str(paths[3])])
    assert r.exit_code == 0, r.output
    assert "'proof_valid': True" in r.stdout

    r = runner.invoke(app, ["verify", str(out), "--root", root, "--data", str(paths[1])])
    assert r.exit_code == 1
    assert "'proof_valid': False" in r.stdout


def test_prove_to_stdout_with_algorithm(tmp_path):
    paths = _files(tmp_path, 4)
    r = runner.invoke(
        app,
        ["prove", *map(str, paths), "--target", str(paths[0]), "--algorithm", "sha3_256"],
    )
    assert r.exit_code == 0, r.output
    doc = json.loads(r.stdout)
    assert doc["algorithm"] == "sha3_256"
    proof = tmp_path / "p.json"
    proof.write_text(r.stdout)
    r = runner.invoke(app, ["verify", str(proof), "--root", doc["root_b64"]])
    assert r.exit_code == 0, r.output


def test_prove_missing_target(tmp_path):
    paths = _files(tmp_path, 3)
    stranger = tmp_path / "stranger.txt"
    stranger.write_bytes(b"not in the tree")
    r = runner.invoke(app, ["prove", *map(str, paths), "--target", str(stranger)])
    assert r.exit_code == 1
    assert "not found" in r.output


def test_oversized_block_rejected(tmp_path, monkeypatch):
    from merkle_core.settings import settings

    monkeypatch.setattr(settings, "max_block_bytes", 4)
    paths = _files(tmp_path, 2)
    r = runner.invoke(app, ["root", *map(str, paths)])
    assert r.exit_code == 1


def test_unknown_algorithm(tmp_path):
    paths = _files(tmp_path, 2)
    r = runner.invoke(app, ["root", *map(str, paths), "--algorithm", "nope"])
    assert r.exit_code == 1
    assert "unsupported hash algorithm" in r.output


def test_verify_unreadable_proof(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    r = runner.invoke(app, ["verify", str(bad), "--root", B64(b"\x00" * 32)])
    assert r.exit_code == 1


def test_verify_rejects_document_rooted_in_itself(tmp_path):
    paths = _files(tmp_path, 4)
    trusted = B64(create([p.read_bytes() for p in paths]).root_digest)
    evil = tmp_path / "evil.txt"
    evil.write_bytes(b"evil")
    forged_tree = create([b"evil"])
    forged = tmp_path / "forged.json"
    forged.write_bytes(canonical_bytes(InclusionProof.build(forged_tree, b"evil")))

    r = runner.invoke(app, ["verify", str(forged), "--root", trusted, "--data", str(evil)])
    assert r.exit_code == 1
    assert "'proof_valid': False" in r.stdout


def test_verify_requires_root(tmp_path):
    paths = _files(tmp_path, 2)
    out = tmp_path / "proof.json"
    runner.invoke(app, ["prove", *map(str, paths), "--target", str(paths[0]), "--out", str(out)])
    r = runner.invoke(app, ["verify", str(out)])
    assert r.exit_code != 0


def test_verify_bad_root_encoding(tmp_path):
    paths = _files(tmp_path, 2)
    out = tmp_path / "proof.json"
    runner.invoke(app, ["prove", *map(str, paths), "--target", str(paths[0]), "--out", str(out)])
    r = runner.invoke(app, ["verify", str(out), "--root", "%%%"])
    assert r.exit_code == 1
