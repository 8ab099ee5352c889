"""
Pytest configuration and fixtures.
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from toggles.api.dependencies import clear_caches, get_flag_store
from toggles.main import app
from toggles.models.schemas import EvaluationContext, Flag
from toggles.repositories.memory import InMemoryFlagStore


@pytest.fixture
def sample_flags():
    """Fixture covering each targeting rule."""
    return [
        Flag(name="everyone-on", everyone=True, roles=["nobody"]),
        Flag(name="everyone-off", everyone=False, users=["u1"], percent=99.9),
        Flag(name="admin-only", roles=["admin"]),
        Flag(name="beta", groups=["beta"]),
        Flag(name="vip-users", users=["alice", "bob"]),
        Flag(name="half", percent=50),
        Flag(
            name="expired-on",
            everyone=True,
            expires=datetime(2000, 1, 1, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def flag_store(sample_flags):
    """Fixture for a seeded in-memory FlagStore."""
    return InMemoryFlagStore(sample_flags)


@pytest.fixture
def anonymous_context():
    return EvaluationContext()


@pytest.fixture
def test_client(sample_flags):
    """
    TestClient fixture backed by fresh singletons.
    The singleton flag store is seeded with the sample flags.
    """
    clear_caches()
    store = get_flag_store()
    for flag in sample_flags:
        store.add(flag)

    with TestClient(app) as client:
        yield client

    clear_caches()
