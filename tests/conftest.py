# Shared fixtures for fexpand tests.

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_package_logger():
    # The CLI installs its own handler on the package logger and stops
    # propagation; put it back so caplog in later tests sees every record.
    logger = logging.getLogger("fexpand")
    saved = (list(logger.handlers), logger.propagate, logger.level)
    yield
    logger.handlers, logger.propagate, logger.level = saved[0], saved[1], saved[2]
