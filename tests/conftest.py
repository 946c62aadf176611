"""Pytest configuration and fixtures."""

import random

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False, help="run slow known-answer tests"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def seed():
    """Fixed seed for tests."""
    return 42


@pytest.fixture
def rng(seed):
    """Seeded random source for test inputs."""
    return random.Random(seed)
