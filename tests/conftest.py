from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_blog_data_logger():
    """Let caplog see records even after a test configured the package logger."""
    logger = logging.getLogger("blog_data")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    yield
    logger.handlers = []
    logger.propagate = True

