"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from graphclone import CloneEngine, CloneSettings


@pytest.fixture
def engine():
    """Fresh CloneEngine with default settings."""
    return CloneEngine(CloneSettings())
