import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    # The CLI configures structlog and the shopsim logger level globally.
    yield
    structlog.reset_defaults()
    logging.getLogger("shopsim").setLevel(logging.NOTSET)
