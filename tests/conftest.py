import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from merkle_core.settings import settings  # noqa: E402


@pytest.fixture(autouse=True)
def _default_sha256(monkeypatch):
    # A developer .env must not change the default digest under test
    monkeypatch.setattr(settings, "hash_algorithm", "sha256")
