import pytest

from workplan.logger import reset_logger


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logger()
