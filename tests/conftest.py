"""Shared pytest fixtures for docmeta tests."""

import inspect

import pytest

from docmeta.types import default_registry


@pytest.fixture
def registry():
    """A fresh default type registry per test."""
    return default_registry()


@pytest.fixture
def write_module(tmp_path):
    """
    Write a Python module into the test's temp directory.

    Example:
        def test_something(write_module):
            path = write_module("mod.py", '''
                def f():
                    pass
            ''')
    """

    def _write(name: str, code: str):
        path = tmp_path / name
        path.write_text(inspect.cleandoc(code) + "\n")
        return path

    return _write
