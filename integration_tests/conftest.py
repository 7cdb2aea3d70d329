"""Pytest configuration for integration tests."""

import asyncio

import pytest

from routinize.db import init_db, seed_exercises


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def db_path(tmp_path):
    """A fully initialized database with the exercise library."""
    path = tmp_path / "routinize.db"
    asyncio.run(init_db(path))
    asyncio.run(seed_exercises(path))
    return path
