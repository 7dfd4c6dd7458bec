"""Root test configuration: canned remote fixtures and logger cleanup"""

import logging

import pytest

from tests.remote import LOCAL_SCHEMA_URL, SCHEMA_URL, FakeRemote, remote_routes


@pytest.fixture(name="remote")
def remote_fixture():
    """Remote serving the recipe schema at both the canonical and local origin."""
    return FakeRemote({**remote_routes(SCHEMA_URL), **remote_routes(LOCAL_SCHEMA_URL)})


@pytest.fixture(name="fetcher")
def fetcher_fixture(remote):
    with remote.fetcher() as f:
        yield f


@pytest.fixture(autouse=True)
def reset_pensieve_logger():
    """Drop handlers installed by setup_logging so CLI runs don't leak closed streams."""
    yield
    logger = logging.getLogger("pensieve")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
