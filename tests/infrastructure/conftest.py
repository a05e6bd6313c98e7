import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    # The CLI binds structlog to the runner's stderr; later tests must not write to it.
    yield
    structlog.reset_defaults()
