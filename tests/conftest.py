from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so `import mailinglist_dynamodb.*` works in tests.
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))
sys.path.insert(0, str(Path(__file__).resolve().parent))


@pytest.fixture
def fake_ddb():
    from ddb_fakes import FakeDynamoResource

    return FakeDynamoResource(tables={"subscriptions": "address", "confirmations": "code"})
