"""
Root conftest.py - fixtures shared across all tests.

Puts the tests directory on the path so that fixture modules under
``tests/fixtures/`` can be loaded via pytest_plugins.
"""

import os
import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).parent.resolve()
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

pytest_plugins = [
    "fixtures.sos_fixtures",
]


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep TALSIM_SOS_* variables of the developer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("TALSIM_SOS_"):
            monkeypatch.delenv(name, raising=False)
