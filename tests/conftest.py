"""
Shared fixtures for spectree tests.
"""

import pytest

from spectree import RunConfig


@pytest.fixture
def quiet() -> RunConfig:
    """Run configuration that keeps reports off stdout."""
    return RunConfig(echo=False)
