"""Shared pytest configuration for Lineage examples.

Every example directory holds an ``app.py`` that builds an Environment and
renders at import time, plus a ``test_*.py`` beside it. The ``example_app``
fixture executes that app.py as a fresh module per test.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest

from lineage.environment import terminal


@pytest.fixture(autouse=True)
def _plain_messages(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> ModuleType:
    """Execute the app.py that sits next to the requesting test file."""
    app_path = Path(request.path).with_name("app.py")
    spec = importlib.util.spec_from_file_location(f"lineage_example_{app_path.parent.name}", app_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
