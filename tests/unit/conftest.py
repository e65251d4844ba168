"""
Unit test fixtures - wrap the randomized factories and the fake store.
"""

from concurrent.futures import Future

import pytest

from tests.factories.fake_session import FakeStore
from tests.factories.model_factories import (
    make_raw_member,
    make_single_form,
    make_submission_payload,
)


@pytest.fixture
def raw_member():
    return make_raw_member()


@pytest.fixture
def submission_payload():
    return make_submission_payload()


@pytest.fixture
def single_form():
    return make_single_form()


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def household_repository(fake_store):
    from infrastructure.household_repository import HouseholdRepository
    return HouseholdRepository(session_provider=fake_store.session, schema_name="public")


@pytest.fixture
def query_repository(fake_store):
    from infrastructure.census_query_repository import CensusQueryRepository
    return CensusQueryRepository(session_provider=fake_store.session, schema_name="public")


class InlineExecutor:
    """Executor that runs submitted work immediately on the calling thread."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True):
        pass


@pytest.fixture
def inline_executor():
    return InlineExecutor()
