# Headless Qt for the table model tests; must be set before QApplication is created.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def _quiet_package_logger():
    # Keep log level changes made by LoggingService tests from leaking
    import logging

    logger = logging.getLogger("paginated_table")
    level = logger.level
    yield
    logger.setLevel(level)
