"""Shared fixtures for bus tests."""

import pytest

from magicbus import MagicBus


@pytest.fixture
def bus() -> MagicBus:
    return MagicBus()
