import importlib
import sys
from pathlib import Path

import pytest

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def definitions_dir() -> Path:
    """Directory holding the sample tool / item definitions."""
    return TEST_DATA / "definitions"


@pytest.fixture
def import_generated(tmp_path, monkeypatch):
    """Import a generated package written below ``tmp_path``.

    Imported modules are dropped from ``sys.modules`` afterwards so every test
    sees its own generated code.
    """
    monkeypatch.syspath_prepend(str(tmp_path))
    imported = []

    def _import(package: str):
        importlib.invalidate_caches()
        imported.append(package)
        return importlib.import_module(package)

    yield _import

    for name in list(sys.modules):
        if any(name == package or name.startswith(f"{package}.") for package in imported):
            del sys.modules[name]
