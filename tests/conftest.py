"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from slimtables.core.context import TestContext
from slimtables.core.scenario.table import DEFAULT_CHILD_KIND, set_default_child_kind
from slimtables.core.table import Table


@pytest.fixture(autouse=True)
def reset_default_child_kind():
    """Keep the process-wide child kind from leaking between tests."""
    yield
    set_default_child_kind(DEFAULT_CHILD_KIND)


@pytest.fixture
def context():
    """Return a fresh document context."""
    return TestContext()


@pytest.fixture
def make_table():
    """Build a Table from a list of rows."""
    def _make(*rows):
        return Table.from_rows([list(r) for r in rows])
    return _make


class RecordingExecutor:
    """Fixture executor returning canned values by method name."""

    def __init__(self, returns=None):
        self.returns = returns or {}
        self.calls = []

    def __call__(self, instruction):
        self.calls.append((instruction.method, instruction.args))
        value = self.returns.get(instruction.method)
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value(*instruction.args)
        return value


@pytest.fixture
def executor():
    """Return an executor with no canned values."""
    return RecordingExecutor()


@pytest.fixture
def temp_project(tmp_path):
    """Create a temporary project directory with a config file."""
    config_file = tmp_path / ".slimtables.yaml"
    config_file.write_text("scenario:\n  default_child_kind: script\n")
    return tmp_path


@pytest.fixture
def sample_document(tmp_path) -> Path:
    """Write a test document with two scenarios and a calling script."""
    path = tmp_path / "document.yaml"
    path.write_text(
        """
tables:
  - rows:
      - [scenario, add _ and _, "x, y"]
      - [push, "@x"]
      - [push, "@{y}"]
      - [check, total, "3"]
  - rows:
      - [scenario, login as, user, with, password, giving, "status?"]
      - [enter user, "@user"]
      - [enter password, "@password"]
      - [check, status, "$status="]
  - rows:
      - [script]
      - [add 1 and 2]
"""
    )
    return path


@pytest.fixture
def make_executor():
    """Return the executor class for tests that need canned values."""
    return RecordingExecutor
