from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from zonesync.catalog import default_catalog  # noqa: E402


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def fake_clock():
    class _Clock:
        def __init__(self) -> None:
            self.now = 1000.0

        def __call__(self) -> float:
            return self.now

    return _Clock()
