import os
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path when pytest runs from a different CWD.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Settings are cached on first import, so override before the app is loaded.
os.environ["RATE_LIMIT_ENABLED"] = "false"

from string_analyzer.main import app  # noqa: E402
from string_analyzer.store import StringStore  # noqa: E402


@pytest.fixture
def store():
    """A fresh store injected into the application for the duration of a test."""
    previous = app.state.store
    app.state.store = StringStore()
    yield app.state.store
    app.state.store = previous


@pytest.fixture
def client(store):
    with TestClient(app) as c:
        yield c
