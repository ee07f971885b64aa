"""Pytest configuration and fixtures for instructions package tests."""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_instructions.checks import create_default_registry  # noqa: E402
from dataknobs_instructions.validator import Validator  # noqa: E402


@pytest.fixture
def registry():
    """A fresh registry holding every built-in check."""
    return create_default_registry("test_checks")


@pytest.fixture
def validator(registry):
    """A validator backed by a fresh registry."""
    return Validator(registry=registry)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp)
