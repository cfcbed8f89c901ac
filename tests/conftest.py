"""Pytest fixtures for shared test state."""

from __future__ import annotations

import os

import pytest

SAMPLE_SOURCE = '''def example_function(x, y):
    """Example function for testing.

    Spans several lines.
    """
    result = x + y
    return result

def another_function(a, b):
    value = a * b
    return value
'''


@pytest.fixture(autouse=True)
def _clean_codefrag_env(monkeypatch) -> None:
    """Keep CODEFRAG_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("CODEFRAG_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_python_file(tmp_path):
    """Create a Python file for excerpt tests."""
    path = tmp_path / "sample.py"
    path.write_text(SAMPLE_SOURCE, encoding="utf-8")
    return str(path)
