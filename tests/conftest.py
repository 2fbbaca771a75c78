from pathlib import Path

import pytest

from nkwaboa.core.config import settings


@pytest.fixture(autouse=True)
def ledger_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the ledger at a per-test directory so tests never share files."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr(settings, "DATA_DIR", str(data_dir))
    return data_dir
