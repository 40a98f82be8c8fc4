"""Shared pytest configuration for trill examples.

Provides the ``example_module`` and ``example_app`` fixtures that load
the ``app.py`` file in the same directory as the test. Each call
re-executes app.py in an isolated module namespace, and ``create_app()``
builds a fresh store, so every test starts with clean state.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def example_module(request: pytest.FixtureRequest):
    """Load the sibling app.py next to the test file as a module."""
    app_path = Path(request.path).parent / "app.py"
    module_name = f"example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_app(example_module):
    """A fresh Mux from the example's ``create_app()`` factory."""
    return example_module.create_app()
