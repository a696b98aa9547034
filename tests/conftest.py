from pathlib import Path
from typing import Dict

import pytest

from utils import IconSource

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture(scope="session")
def testdata() -> Dict[str, bytes]:
    return {p.name: p.read_bytes() for p in TESTDATA.glob("*.svg")}


@pytest.fixture
def source(testdata):
    """Build an IconSource from a fixture file, optionally under another file name."""

    def _source(data_name: str, path: str = "") -> IconSource:
        return IconSource(path or data_name, testdata[data_name])

    return _source
