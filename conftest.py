import logging

import pytest

from tests.helpers import EventHistory

logging.basicConfig(level=logging.DEBUG)


@pytest.fixture(scope="function")
def event_history() -> EventHistory:
    return EventHistory()
