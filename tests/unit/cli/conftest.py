"""Fixtures for CLI tests."""

import logging

import pytest

from confluence2md.logging_utils import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the handler and level changes made by ``main``."""
    root = logging.getLogger()
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(root.handlers)
    root_level = root.level
    package_level = package_logger.level

    yield

    root.handlers[:] = handlers
    root.setLevel(root_level)
    package_logger.setLevel(package_level)
    logging.captureWarnings(False)
