from pathlib import Path

import pytest


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    path = tmp_path / "m2"
    path.mkdir()
    return path
