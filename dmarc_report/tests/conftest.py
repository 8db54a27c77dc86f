import pytest

from dmarc_report.logging import configure_logging


@pytest.fixture(autouse=True)
def configure_test_logging():
    configure_logging({}, debug=True)
